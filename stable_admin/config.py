"""
Settings

Everything the admin API reads from the environment (or a local .env):
database URL and pool, the shared admin password and session signing key,
account password policy, login throttling and runtime mode.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Note: get_settings() is cached. Tests build their own Settings
    instance and hand it to create_app() instead of touching the cache.
    """

    # Database
    DATABASE_URL: str = "postgresql+psycopg2://localhost/stable_admin"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40

    # Admin gate
    # The whole dashboard sits behind one shared password
    ADMIN_PASSWORD: str = "change-me"
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "admin-auth"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24

    # Owner/user accounts created through the API
    PASSWORD_MIN_LENGTH: int = 6

    # Redis for login throttling
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 10
    RATE_LIMIT_BURST: int = 5

    # Runtime
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Settings from the process environment, read once."""
    return Settings()
