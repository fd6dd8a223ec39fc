"""Application configuration using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are validated at startup. Missing required settings
    or invalid values will cause the application to fail fast with
    clear error messages.
    """

    # API Settings
    api_title: str = Field(default="Community Hub Search", description="API title")
    api_version: str = Field(default="1.0.0", description="API version")

    # Data Store Settings
    supabase_url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the Supabase project (REST API lives under /rest/v1)",
    )
    supabase_anon_key: str = Field(
        default="local-anon-key",
        description="Anonymous API key sent as apikey and bearer token",
    )
    store_timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Request timeout in seconds for data store calls",
    )
    store_max_retries: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Attempts per data store call (1 disables retries)",
    )

    # Collections
    mentors_collection: str = Field(
        default="mentors",
        min_length=1,
        description="Table holding mentor profiles",
    )
    match_profiles_collection: str = Field(
        default="match_profiles",
        min_length=1,
        description="Table holding matchmaking profiles",
    )
    listings_collection: str = Field(
        default="listings",
        min_length=1,
        description="Table holding marketplace listings",
    )

    # Result Shaping
    max_tags: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum number of tags attached to a search result",
    )

    # Logging Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Ensure the store URL is an http(s) URL without a trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"supabase_url must start with 'http://' or 'https://', got '{v}'"
            )
        return v.rstrip("/")

    @field_validator("supabase_anon_key")
    @classmethod
    def validate_anon_key(cls, v: str) -> str:
        """Ensure the API key is not empty or a placeholder."""
        if v.strip() == "":
            raise ValueError("supabase_anon_key cannot be empty string")
        if v in {"your-anon-key-here", "YOUR_SUPABASE_ANON_KEY"}:
            raise ValueError(
                "supabase_anon_key must be set to a valid key, "
                "not the placeholder value"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"log_level must be one of {valid_levels}, got '{v}'"
            )
        return v_upper

    def model_post_init(self, __context) -> None:
        """Additional validation after model initialization."""
        collections = [
            self.mentors_collection,
            self.match_profiles_collection,
            self.listings_collection,
        ]
        if len(set(collections)) != len(collections):
            raise ValueError(
                f"collection names must be distinct, got {collections}"
            )

    @property
    def rest_url(self) -> str:
        """PostgREST endpoint of the configured project."""
        return f"{self.supabase_url}/rest/v1"


# Global settings instance
# Initialized lazily on first access and fails fast if configuration is invalid
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings: The application settings

    Raises:
        ValueError: If settings validation fails
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment.

    Returns:
        Settings: The reloaded application settings
    """
    global _settings
    _settings = Settings()
    return _settings
