from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).parent.parent.parent

# Bounding box of Ust-Kamenogorsk: lng_min,lat_min,lng_max,lat_max
UST_KAMENOGORSK_BOUNDS = "82.26768493652345,49.80964127242487,83.00788879394533,50.144400733540806"


class Settings(BaseSettings):
    """Centralized backend configuration with type validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
    )

    # Upstream air-quality provider (WAQI)
    city_name: str = "Усть-Каменогорск"
    default_bounds: str = UST_KAMENOGORSK_BOUNDS
    waqi_bounds_url: str = "https://mapq.waqi.info/mapq2/bounds"
    waqi_station_url: str = "https://airnet.waqi.info/airnet/feed/hourly"
    upstream_timeout_seconds: float = Field(default=15.0, gt=0, le=120)

    # Groq. No key means local-only analysis.
    groq_api_key: Optional[str] = Field(default=None)
    groq_model: str = Field(default="llama-3.3-70b-versatile")
    llm_timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    # Model temperatures
    narrative_temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    advisor_temperature: float = Field(default=0.7, ge=0.0, le=1.0)

    # Tender dataset
    tenders_data_path: Path = Field(default=_BACKEND_DIR / "data" / "tenders.json")

    # Risk engine calibration
    months_per_billion: float = Field(default=3.0, gt=0, le=60)
    timeline_slack: float = Field(default=0.7, gt=0, le=1.0)

    # Air-quality cache
    cache_ttl_seconds: int = Field(default=120, ge=10, le=86400)
    cache_max_size: int = Field(default=32, ge=1, le=10000)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.groq_api_key)


@lru_cache
def get_settings() -> Settings:
    """Cached singleton so .env is not reloaded on every request."""
    return Settings()


settings = get_settings()
