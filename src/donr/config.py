"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEBUG_ENVIRONMENTS = frozenset({"local", "development"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    google_maps_api_key: str | None = None
    geocoder_user_agent: str = "Donr-App/1.0"
    google_geocode_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    fcm_project_id: str | None = None
    fcm_access_token: str | None = None
    matching_radius_miles: float = 10.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def debug(self) -> bool:
        """Return true when responses may carry internal error detail."""
        return self.environment in DEBUG_ENVIRONMENTS
