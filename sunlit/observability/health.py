"""
HTTP endpoints for sunlit.

This module implements the health, readiness, metrics and info
endpoints together with the sun-info and sunny-venues query endpoints.
"""

import time
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError

from sunlit.adapters.overpass import OverpassBuildingProvider, OverpassClient, OverpassVenueProvider
from sunlit.core.classification import SunlightClassificationService
from sunlit.core.errors import ProviderError, QueryValidationError
from sunlit.core.models import BoundingBox, Coordinates
from sunlit.core.shadow import ShadowOccluder
from sunlit.core.solar import SolarPositionCalculator
from sunlit.observability.logging_setup import get_logger
from sunlit.orchestrators.sun_info import GetSunInfo
from sunlit.orchestrators.sunny_venues import GetSunnyVenues, SunnyVenuesQuery
from sunlit.ports.buildings import BuildingProvider
from sunlit.ports.solar import SunCalculatorPort
from sunlit.ports.venues import VenueProvider
from sunlit.settings import Settings

log = get_logger("sunlit.http")


def _validation_detail(e: ValidationError) -> dict:
    errors = e.errors(include_url=False, include_context=False, include_input=False)
    message = "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in errors)
    return {"code": "validation_error", "message": message}


def create_app(settings: Settings,
               venue_provider: Optional[VenueProvider] = None,
               building_provider: Optional[BuildingProvider] = None,
               sun_calculator: Optional[SunCalculatorPort] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Sunlit vs. shaded outdoor venues"
    )

    start_time = time.time()

    if venue_provider is None or building_provider is None:
        client = OverpassClient(
            api_url=settings.overpass.api_url,
            timeout=settings.overpass.timeout_sec,
            max_retries=settings.overpass.max_retries,
            backoff_initial_sec=settings.overpass.backoff_initial_sec,
            backoff_max_sec=settings.overpass.backoff_max_sec,
        )
        venue_provider = venue_provider or OverpassVenueProvider(client, settings.overpass.query_timeout_sec)
        building_provider = building_provider or OverpassBuildingProvider(client, settings.overpass.query_timeout_sec)

    sun_calculator = sun_calculator or SolarPositionCalculator(settings.solar)
    classifier = SunlightClassificationService(ShadowOccluder(settings.occlusion))

    sunny_venues = GetSunnyVenues(
        venue_provider,
        building_provider,
        sun_calculator,
        classifier,
        max_bbox_degrees=settings.query.max_bbox_degrees,
        max_radius_m=settings.query.max_radius_m,
    )
    sun_info = GetSunInfo(sun_calculator)

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level
        })

    @app.get("/sun")
    async def sun(lat: float = Query(...),
                  lon: float = Query(...),
                  at: Optional[datetime] = Query(default=None)):
        """태양 위치/이벤트 시각 조회"""
        try:
            result = sun_info.execute(lat, lon, at)
        except ValidationError as e:
            log.warning(f"태양 정보 요청 검증 실패 status:422 errors:{e.error_count()}")
            raise HTTPException(status_code=422, detail=_validation_detail(e))
        return JSONResponse(result.to_payload())

    @app.get("/venues/sunny")
    async def venues_sunny(south: Optional[float] = None,
                           west: Optional[float] = None,
                           north: Optional[float] = None,
                           east: Optional[float] = None,
                           lat: Optional[float] = None,
                           lon: Optional[float] = None,
                           radius: Optional[float] = None,
                           at: Optional[datetime] = None,
                           outdoor_only: Optional[bool] = None):
        """장소 일조 조회 엔드포인트"""
        try:
            bbox = None
            if None not in (south, west, north, east):
                bbox = BoundingBox(south=south, west=west, north=north, east=east)
            center = None
            if lat is not None and lon is not None:
                center = Coordinates(latitude=lat, longitude=lon)

            query = SunnyVenuesQuery(
                bbox=bbox,
                center=center,
                radius_m=radius,
                at=at,
                only_outdoor_seating=(
                    outdoor_only if outdoor_only is not None else settings.query.only_outdoor_seating
                ),
            )
            result = await sunny_venues.execute(query)
        except QueryValidationError as e:
            log.warning(f"장소 일조 요청 검증 실패 status:422 code:{e.code}")
            raise HTTPException(status_code=422, detail=e.to_dict())
        except ValidationError as e:
            log.warning(f"장소 일조 요청 검증 실패 status:422 errors:{e.error_count()}")
            raise HTTPException(status_code=422, detail=_validation_detail(e))
        except ProviderError as e:
            log.warning(f"장소 일조 조회 실패 status:502 code:{e.code} error:{e}")
            raise HTTPException(status_code=502, detail=e.to_dict())

        return JSONResponse(result.to_payload())

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "sun": "/sun",
                "sunny_venues": "/venues/sunny"
            }
        })

    return app
