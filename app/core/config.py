from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with type-safe configuration management."""
    
    # Database Configuration
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/eventrsvp"
    
    # Bounded retry on transient store contention (serialization failures, deadlocks)
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_MAX_WAIT: float = 1.0
    
    # Redis Configuration
    REDIS_URL: str = "redis://redis:6379/0"
    CACHE_ENABLED: bool = True
    ROSTER_CACHE_TTL: int = 60
    
    # Rate limiting for the public one-click RSVP link
    RATE_LIMIT_ENABLED: bool = True
    ONE_CLICK_RATE_LIMIT: str = "30/minute"
    
    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"
    
    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: Optional[str] = None
    LOG_FILE: str = "logs/rsvp-service.log"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
    
    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated ALLOWED_ORIGINS string to list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


# Create a single instance to be imported throughout the app
settings = Settings()
