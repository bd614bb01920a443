from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from app.api.errors import register_exception_handlers
from app.api.v1.routes import rsvps as rsvps_router, health as health_router
from app.cache.redis_client import cache
from app.core.config import settings
from app.core.logging import logger
from app.core.rate_limit import limiter
from app.db.session import engine, Base
from app.db import models  # noqa: F401  registers every table on Base.metadata

app = FastAPI(title="RSVP Service")

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(rsvps_router.router)
api_router.include_router(health_router.router)

app.include_router(api_router)

@app.on_event("startup")
async def on_startup():
    # create tables (migrations under alembic/ manage production schemas)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"RSVP service started ({settings.ENVIRONMENT})")

@app.on_event("shutdown")
async def on_shutdown():
    await cache.close()
    await engine.dispose()
