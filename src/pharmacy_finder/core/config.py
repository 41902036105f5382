"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a ``.env`` file).
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_GEOCODER_PROVIDERS = ("nominatim", "photon")
_PHARMACY_SOURCES = ("static", "http")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service region
    supported_region: str = Field(
        default="Izmir",
        min_length=1,
        description="Name of the single city in which pharmacies are resolved",
    )

    # Pharmacy data
    pharmacy_source: str = Field(
        default="static",
        description="Pharmacy roster source: 'static' (bundled roster) or 'http'",
    )
    pharmacy_source_url: str | None = Field(
        default=None,
        description="Endpoint returning the pharmacy roster as a JSON array (required for 'http')",
    )
    pharmacy_source_timeout: float = Field(
        default=10.0,
        description="Pharmacy source request timeout in seconds",
        gt=0,
    )
    pharmacy_cache_ttl_seconds: int = Field(
        default=3 * 60 * 60,
        description="How long a fetched roster is served from cache",
        gt=0,
    )

    # Geocoding
    geocoder_provider: str = Field(
        default="nominatim",
        description="Geocoder used for address lookup and region detection",
    )
    geocoder_timeout: float = Field(
        default=10.0,
        description="Geocoder request timeout in seconds",
        gt=0,
    )
    geocoder_nominatim_email: str = Field(
        default="",
        description="Email for Nominatim usage policy compliance",
    )
    geocoder_photon_base_url: str = Field(
        default="https://photon.komoot.io",
        description="Photon API base URL (public or self-hosted)",
    )

    # Persistence
    database_url: str = Field(
        default="sqlite+aiosqlite:///./pharmacy-finder.db",
        description="Async SQLAlchemy URL for the persistent key-value store",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @field_validator("geocoder_provider")
    @classmethod
    def validate_geocoder_provider(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _GEOCODER_PROVIDERS:
            msg = f"geocoder_provider must be one of {list(_GEOCODER_PROVIDERS)}, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("pharmacy_source")
    @classmethod
    def validate_pharmacy_source(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _PHARMACY_SOURCES:
            msg = f"pharmacy_source must be one of {list(_PHARMACY_SOURCES)}, got {v!r}"
            raise ValueError(msg)
        return v


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
