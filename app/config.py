from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (privileged, used by every write path)
    DATABASE_URL: str = "postgresql+asyncpg://localhost:5432/equipment_registry"

    # Database for read-only browsing and reports; falls back to DATABASE_URL
    PUBLIC_DATABASE_URL: str | None = None

    @field_validator("DATABASE_URL", "PUBLIC_DATABASE_URL", mode="before")
    @classmethod
    def convert_database_url(cls, v: str | None) -> str | None:
        """Convert postgresql:// to postgresql+asyncpg:// for async support."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # CORS
    FRONTEND_URL: str = "http://localhost:3000"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    DOCS_ENABLED: bool = True
    LOG_LEVEL: str | None = None

    # CSV import
    IMPORT_MAX_FILE_SIZE_MB: int = 10

    # Reports: merge monthly cost buckets across years unless disabled
    MONTHLY_COSTS_COLLAPSE_YEARS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

    @model_validator(mode="after")
    def disable_debug_in_production(self) -> "Settings":
        if self.is_production:
            self.DEBUG = False
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("production", "staging")

    @property
    def sqlalchemy_echo(self) -> bool:
        """Echo SQL only while debugging outside production."""
        return self.DEBUG and not self.is_production

    @property
    def public_database_url(self) -> str:
        return self.PUBLIC_DATABASE_URL or self.DATABASE_URL

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "DEBUG" if self.DEBUG else "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
