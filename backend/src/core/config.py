"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SSL_MODE_DISABLE = "disable"
SSL_MODE_REQUIRE = "require"


class Settings(BaseSettings):
    """Application settings loaded from BOOKMARKER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKMARKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 1323
    log_level: str = "INFO"

    # Database - either a full URL or the individual parts below
    database_url_override: str | None = Field(
        default=None,
        validation_alias="BOOKMARKER_DATABASE_URL",
    )
    db_host: str = "0.0.0.0"
    db_port: int = 5432
    db_user: str = "user"
    db_password: str = "password"
    db_name: str = "db"
    db_ssl_mode: str = SSL_MODE_DISABLE
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Work factor for bcrypt password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="*",
        validation_alias="BOOKMARKER_CORS_ORIGINS",
    )

    @field_validator("db_ssl_mode")
    @classmethod
    def validate_ssl_mode(cls, v: str) -> str:
        """Only 'disable' and 'require' are supported."""
        if v not in (SSL_MODE_DISABLE, SSL_MODE_REQUIRE):
            raise ValueError(f"DB SSL mode is invalid: {v}")
        return v

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL, built from the db_* parts unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        url = (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )
        if self.db_ssl_mode == SSL_MODE_REQUIRE:
            url += "?ssl=require"
        return url

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
