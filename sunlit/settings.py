# sunlit/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

from sunlit.core.shadow import OcclusionConfig
from sunlit.core.solar import SolarConfig
from sunlit.adapters.overpass.client import DEFAULT_API_URL
from sunlit.orchestrators.sunny_venues import DEFAULT_MAX_BBOX_DEGREES, DEFAULT_MAX_RADIUS_M

class OverpassConfig(BaseModel):
    api_url: str = DEFAULT_API_URL
    timeout_sec: float = 30.0
    query_timeout_sec: int = 30
    max_retries: int = 2
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 8.0

class QueryConfig(BaseModel):
    max_bbox_degrees: float = DEFAULT_MAX_BBOX_DEGREES
    max_radius_m: float = DEFAULT_MAX_RADIUS_M
    only_outdoor_seating: bool = False

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "sunlit"
    build_version: str = "0.1.0"
    build_date: str = "2026-01-01"
    log_level: str = "INFO"
    log_colorize: bool = True

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    occlusion: OcclusionConfig = Field(default_factory=OcclusionConfig)
    solar: SolarConfig = Field(default_factory=SolarConfig)
    overpass: OverpassConfig = Field(default_factory=OverpassConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    observability: Observability = Field(default_factory=Observability)
