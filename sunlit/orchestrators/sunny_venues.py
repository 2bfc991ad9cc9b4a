"""
Sunny venues orchestrator for sunlit.

This module resolves a venue query (bounding box or center+radius),
derives one sun position for the whole query area, fetches venues and
buildings concurrently and hands them to the classification service.

One sun position is shared by every venue in the query. Across a
small bounding box the altitude/azimuth difference is far below the
shadow model's tolerance; callers that need finer precision should
shrink the query area instead.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Tuple

from pydantic import BaseModel, Field

from sunlit.core.classification import ClassificationResult, SunlightClassificationService
from sunlit.core.errors import ProviderError, QueryValidationError, to_provider_error
from sunlit.core.models import BoundingBox, Coordinates, SunPosition, Venue
from sunlit.core.solar import ensure_utc
from sunlit.observability import metrics
from sunlit.observability.logging_setup import get_logger
from sunlit.ports.buildings import BuildingProvider
from sunlit.ports.solar import SunCalculatorPort
from sunlit.ports.venues import VenueProvider

log = get_logger("sunlit.orchestrator")

DEFAULT_MAX_BBOX_DEGREES = 0.05
DEFAULT_MAX_RADIUS_M = 2000.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SunnyVenuesQuery(BaseModel):
    """장소 일조 조회 조건. bbox 또는 center+radius_m 중 하나가 필요"""
    bbox: Optional[BoundingBox] = None
    center: Optional[Coordinates] = None
    radius_m: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    at: Optional[datetime] = None
    only_outdoor_seating: bool = False


class QueryMeta(BaseModel):
    timestamp: datetime
    buildings_analyzed: int
    venue_count: int


class SunnyVenuesResult(BaseModel):
    """장소 일조 조회 결과"""
    venues: List[Venue]
    sun_position: SunPosition
    is_daytime: bool
    sunny_count: int
    shaded_count: int
    unknown_count: int = 0
    meta: QueryMeta

    def to_payload(self) -> dict:
        return {
            "venues": [v.to_payload() for v in self.venues],
            "sunPosition": {
                "azimuthDegrees": self.sun_position.azimuth_degrees,
                "altitudeDegrees": self.sun_position.altitude_degrees,
                "isDaytime": self.is_daytime,
            },
            "sunnyCount": self.sunny_count,
            "shadedCount": self.shaded_count,
            "unknownCount": self.unknown_count,
            "meta": {
                "timestamp": self.meta.timestamp.isoformat(),
                "buildingsAnalyzed": self.meta.buildings_analyzed,
                "venueCount": self.meta.venue_count,
            },
        }


async def _timed_fetch(provider: str, fetch: Awaitable):
    """제공자 호출 시간을 기록하고 예외를 분류된 ProviderError 로 변환합니다."""
    started = time.perf_counter()
    try:
        return await fetch
    except ProviderError:
        raise
    except Exception as e:
        raise to_provider_error(e) from e
    finally:
        metrics.provider_fetch_seconds.labels(provider=provider).observe(time.perf_counter() - started)


class GetSunnyVenues:
    """장소 일조 조회 오케스트레이터"""

    def __init__(self,
                 venue_provider: VenueProvider,
                 building_provider: BuildingProvider,
                 sun_calculator: SunCalculatorPort,
                 classifier: Optional[SunlightClassificationService] = None,
                 *,
                 max_bbox_degrees: float = DEFAULT_MAX_BBOX_DEGREES,
                 max_radius_m: float = DEFAULT_MAX_RADIUS_M,
                 clock: Callable[[], datetime] = _utc_now):
        """
        초기화합니다.

        Args:
            venue_provider: 장소 제공자
            building_provider: 건물 제공자
            sun_calculator: 태양 위치 계산기
            classifier: 일조 판정 서비스
            max_bbox_degrees: 경계 상자 한 변의 최대 크기 (도)
            max_radius_m: 최대 조회 반경 (미터)
            clock: 조회 시각 기본값 공급자
        """
        self.venue_provider = venue_provider
        self.building_provider = building_provider
        self.sun_calculator = sun_calculator
        self.classifier = classifier or SunlightClassificationService()
        self.max_bbox_degrees = max_bbox_degrees
        self.max_radius_m = max_radius_m
        self.clock = clock

    def _resolve_area(self, query: SunnyVenuesQuery) -> Tuple[Coordinates, Callable[[], Awaitable], Callable[[], Awaitable]]:
        """
        조회 영역을 검증하고 기준점과 제공자 호출 함수를 준비합니다.

        Raises:
            QueryValidationError: 영역 조건이 없거나 허용 크기를 넘는 경우
        """
        if query.bbox is not None:
            bbox = query.bbox
            if bbox.lat_span > self.max_bbox_degrees or bbox.lon_span > self.max_bbox_degrees:
                raise QueryValidationError(
                    f"Bounding box too large (max {self.max_bbox_degrees} degrees per side)",
                    code="bbox_too_large",
                )
            return (
                bbox.center(),
                lambda: self.venue_provider.find_by_bounding_box(bbox),
                lambda: self.building_provider.find_by_bounding_box(bbox),
            )

        if query.center is not None and query.radius_m is not None:
            if query.radius_m > self.max_radius_m:
                raise QueryValidationError(
                    f"Radius too large (max {self.max_radius_m:g} meters)",
                    code="radius_too_large",
                )
            return (
                query.center,
                lambda: self.venue_provider.find_nearby(query.center, query.radius_m),
                lambda: self.building_provider.find_nearby(query.center, query.radius_m),
            )

        raise QueryValidationError.missing_location()

    async def execute(self, query: SunnyVenuesQuery) -> SunnyVenuesResult:
        """
        조회를 실행합니다.

        Args:
            query: 조회 조건

        Returns:
            SunnyVenuesResult

        Raises:
            QueryValidationError: 조회 조건 오류
            ProviderError: 장소/건물 조회 실패 (bbox_too_large, network, fetch_failed)
        """
        reference, venue_fetch, building_fetch = self._resolve_area(query)
        metrics.queries_total.labels(kind="sunny_venues").inc()

        at = ensure_utc(query.at) if query.at is not None else self.clock()
        sun_position = self.sun_calculator.get_position(reference, at)
        is_daytime = self.sun_calculator.is_daytime(reference, at)

        try:
            venues, buildings = await asyncio.gather(
                _timed_fetch("venues", venue_fetch()),
                _timed_fetch("buildings", building_fetch()),
            )
        except ProviderError as e:
            metrics.provider_errors.labels(code=e.code).inc()
            log.error(f"장소/건물 조회 실패 code:{e.code} error:{e.message}")
            raise

        if query.only_outdoor_seating:
            venues = [v for v in venues if v.has_outdoor_seating]

        with metrics.classification_seconds.time():
            # 순수 계산이지만 건물 수에 비례하므로 이벤트 루프 밖에서 실행
            classified: ClassificationResult = await asyncio.to_thread(
                self.classifier.classify, venues, buildings, sun_position
            )

        for venue in classified.venues:
            if venue.sunlight_status is not None:
                metrics.venues_classified.labels(status=venue.sunlight_status.kind.value).inc()
        if classified.buildings_skipped:
            metrics.buildings_skipped.inc(classified.buildings_skipped)

        log.info(
            f"장소 일조 조회 완료 venues:{len(classified.venues)} buildings:{classified.buildings_analyzed} "
            f"sunny:{classified.sunny_count} shaded:{classified.shaded_count} "
            f"altitude:{sun_position.altitude_degrees:.2f}"
        )

        return SunnyVenuesResult(
            venues=classified.venues,
            sun_position=sun_position,
            is_daytime=is_daytime,
            sunny_count=classified.sunny_count,
            shaded_count=classified.shaded_count,
            unknown_count=classified.unknown_count,
            meta=QueryMeta(
                timestamp=at,
                buildings_analyzed=classified.buildings_analyzed,
                venue_count=len(classified.venues),
            ),
        )
