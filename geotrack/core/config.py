"""Application configuration."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "geotrack"
    version: str = "0.1.0"

    # Tracking Settings
    FORCE_CONTINUOUS_UPDATES: bool = False
    KEEP_LAST_KNOWN_LOCATION: bool = True
    SHOW_VERBOSE_MESSAGE: bool = False

    # HTTP Geocoder Settings
    GEOCODER_BASE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GOOGLE_MAPS_API_KEY: str | None = None
    GEOCODER_TIMEOUT: float = Field(default=10.0, gt=0)

    # Native Geocoder Settings
    NOMINATIM_USER_AGENT: str = "geotrack"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @model_validator(mode="after")
    def normalize_base_url(self) -> "Settings":
        """Strip query strings and trailing separators from the geocoder URL."""
        base_url = self.GEOCODER_BASE_URL.split("?", 1)[0].rstrip("/")
        if not base_url:
            raise ValueError("GEOCODER_BASE_URL must not be empty")
        self.GEOCODER_BASE_URL = base_url
        return self


# Create settings instance
settings = Settings()
