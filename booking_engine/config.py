"""Application configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Flight Booking Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    SEED_DEMO_DATA: bool = True

    # Reservation settings
    RESERVATION_TIMEOUT_SECONDS: int = 600  # 10 minutes
    OFFER_TIMEOUT_SECONDS: int = 300  # 5 minutes
    SWEEP_INTERVAL_SECONDS: float = 5.0
    LIMITED_SEATS_THRESHOLD: int = 10

    # System log
    SYSTEM_LOG_CAPACITY: int = 100

    # Closed reservations and lapsed offers remembered for late lookups
    HISTORY_LIMIT: int = 10_000

    # Flight lock settings
    LOCK_BACKEND: str = "local"  # "local" or "redis"
    LOCK_TIMEOUT_SECONDS: int = 30
    LOCK_RETRY_DELAY_MS: int = 50
    LOCK_MAX_RETRIES: int = 100

    # Redis (only used by the redis lock backend)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0

    @property
    def redis_url(self) -> str:
        """Get Redis URL."""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
