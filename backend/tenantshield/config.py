from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class Settings(BaseSettings):
    # Gemini (multimodal analysis)
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.25  # Low temperature keeps reports consistent
    gemini_timeout_seconds: Optional[float] = None  # None = wait for the model

    # Google Places (legal clinic lookup)
    google_places_api_key: Optional[str] = None
    places_search_url: str = "https://places.googleapis.com/v1/places:searchNearby"
    places_radius_meters: float = 5000
    places_max_results: int = 10
    places_timeout_seconds: float = 10

    # Request limits: JSON-encoded character count of the images array (~12MB)
    max_image_payload_chars: int = 12_000_000

    # CORS: single allowed origin; any origin when unset
    client_url: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 5001

    # Logging
    log_level: str = "INFO"

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def has_places_key(self) -> bool:
        return bool(self.google_places_api_key)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the process-wide settings once, at startup."""
    return Settings()
