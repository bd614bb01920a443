from datetime import datetime, timezone
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from app.core.config import settings

engine_options = {"echo": False, "pool_pre_ping": True}
if not settings.is_sqlite:
    # Connection pooling for the server database
    engine_options.update(
        pool_size=20,              # Number of permanent connections to maintain
        max_overflow=10,           # Maximum number of connections to allow beyond pool_size
        pool_recycle=3600,         # Recycle connections after 1 hour (3600 seconds)
    )

engine = create_async_engine(settings.DATABASE_URL, **engine_options)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


def utcnow() -> datetime:
    """Column default for creation timestamps."""
    return datetime.now(timezone.utc)


def enable_sqlite_foreign_keys(async_engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
