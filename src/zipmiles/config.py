from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from zipmiles import __version__

ZIPPOPOTAM_URL = "http://api.zippopotam.us/us"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class EngineConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    primary_base_url: str = ZIPPOPOTAM_URL
    secondary_base_url: str = NOMINATIM_URL
    user_agent: str = f"zipmiles/{__version__}"
    connect_timeout_seconds: float = Field(default=5.0, gt=0)
    read_timeout_seconds: float = Field(default=10.0, gt=0)
    min_interval_seconds: float = Field(default=1.0, ge=0)
    geocode_ttl_days: float = Field(default=30.0, gt=0)
    distance_cache_max_entries: int = Field(default=10_000, ge=1)
    road_correction_factor: float = Field(default=1.15, ge=1.0)
    default_leg_miles: float = Field(default=250.0, ge=0)
    max_workers: int = Field(default=8, ge=1)

    @property
    def timeout(self) -> tuple[float, float]:
        return self.connect_timeout_seconds, self.read_timeout_seconds


def load_config(config_path: str | Path | None = None) -> EngineConfig:
    if config_path is None:
        return EngineConfig()
    path = Path(config_path)
    payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return EngineConfig.model_validate(payload)
