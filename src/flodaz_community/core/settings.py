"""Application settings and configuration.

This module defines all configuration options for the Flodaz Community API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Flodaz Community API", alias="APP_NAME")
    app_version: str = Field(default="2.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Relational content store
    database_url: str = Field(default="sqlite:///./flodaz.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Identity provider (Supabase auth admin API)
    supabase_url: str | None = Field(default=None, alias="SUPABASE_URL")
    supabase_service_key: str | None = Field(default=None, alias="SUPABASE_SERVICE_KEY")
    identity_timeout_seconds: float = Field(default=10.0, alias="IDENTITY_TIMEOUT_SECONDS")

    # Media CDN (Cloudinary upload API)
    cloudinary_cloud_name: str | None = Field(default=None, alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: str | None = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: str | None = Field(default=None, alias="CLOUDINARY_API_SECRET")
    cloudinary_folder: str = Field(default="flodaz_community", alias="CLOUDINARY_FOLDER")
    media_timeout_seconds: float = Field(default=30.0, alias="MEDIA_TIMEOUT_SECONDS")

    # Upload constraints
    upload_max_files: int = Field(default=5, alias="UPLOAD_MAX_FILES")
    upload_max_file_bytes: int = Field(default=5 * 1024 * 1024, alias="UPLOAD_MAX_FILE_BYTES")

    # Feed pagination
    feed_default_limit: int = Field(default=10, alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=100, alias="FEED_MAX_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_development(self) -> bool:
        """Return True when detailed error messages may be exposed to clients."""
        return self.environment.lower() == "development"


settings = Settings()
