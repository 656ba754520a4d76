"""Configuration management for MyThoughts."""

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    storage_backend: str = "postgres"

    # Database
    database_url: str = "postgresql://localhost:5432/mythoughts"
    db_name: str | None = None
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 30.0

    # API
    host: str = "0.0.0.0"
    port: int = Field(
        default=19200,
        validation_alias=AliasChoices("port", "mythoughts_port"),
        description="API port (checks PORT, then MYTHOUGHTS_PORT, defaults to 19200)",
    )
    debug: bool = False

    # Access
    enforce_ownership: bool = False
    session_tokens: dict[str, str] = Field(default_factory=dict)

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # Display
    mythoughts_timezone: str | None = None

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend is one of the supported options."""
        valid_backends = {"postgres", "memory"}
        if v.lower() not in valid_backends:
            raise ValueError(
                f"Invalid STORAGE_BACKEND: '{v}'. "
                f"Must be one of: {', '.join(sorted(valid_backends))}"
            )
        return v.lower()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only console and json renderers are wired up."""
        if v.lower() not in {"console", "json"}:
            raise ValueError(f"Invalid LOG_FORMAT: '{v}'. Must be console or json")
        return v.lower()

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        """Pool bounds must be consistent."""
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                "DB_POOL_MIN_SIZE cannot be larger than DB_POOL_MAX_SIZE "
                f"({self.db_pool_min_size} > {self.db_pool_max_size})"
            )
        return self

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Database name for startup hints, taken from the URL unless set
        if not self.db_name:
            from urllib.parse import urlparse

            self.db_name = urlparse(self.database_url).path.lstrip("/") or None


# Lazy settings initialization
_settings = None


def get_settings() -> Settings:
    """Get the settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


class SettingsProxy:
    """Proxy to provide attribute access to settings."""

    def __getattr__(self, name):
        return getattr(get_settings(), name)

    def __setattr__(self, name, value):
        setattr(get_settings(), name, value)


settings = SettingsProxy()
