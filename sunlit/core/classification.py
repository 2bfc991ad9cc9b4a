"""
Sunlight classification service for sunlit.

This module fans the shadow occluder out over a batch of venues and
reduces the four-way statuses to "is it sunny now" counts.
"""

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from sunlit.observability.logging_setup import get_logger
from .models import Building, SunlightStatus, SunPosition, Venue, counts_as_sunny
from .shadow import ShadowOccluder, is_usable_building

log = get_logger("sunlit.classification")


class ClassificationResult(BaseModel):
    """일괄 판정 결과"""
    venues: List[Venue]
    statuses: Dict[str, SunlightStatus]
    sunny_count: int = 0
    shaded_count: int = 0
    unknown_count: int = 0
    buildings_analyzed: int = 0
    buildings_skipped: int = 0


class SunlightClassificationService:
    """장소 일괄 일조 판정 서비스"""

    def __init__(self, occluder: Optional[ShadowOccluder] = None):
        self.occluder = occluder or ShadowOccluder()

    def classify(
        self,
        venues: Sequence[Venue],
        buildings: Sequence[Building],
        sun_position: SunPosition
    ) -> ClassificationResult:
        """
        장소 목록의 일조 상태를 판정하고 집계합니다.

        좌표가 유효하지 않은 건물은 한 번만 걸러내고 나머지로 판정합니다.
        입력 장소는 변경하지 않고 상태가 부착된 사본을 반환합니다.

        Args:
            venues: 장소 목록
            buildings: 건물 목록
            sun_position: 조회 전체에 공통인 태양 위치

        Returns:
            ClassificationResult
        """
        usable = tuple(b for b in buildings if is_usable_building(b))
        skipped = len(buildings) - len(usable)
        if skipped:
            log.warning(f"유효하지 않은 건물 제외 skipped:{skipped} total:{len(buildings)}")

        statuses = self.occluder.analyze_venues(venues, usable, sun_position)

        sunny = shaded = unknown = 0
        attached: List[Venue] = []
        for venue in venues:
            status = statuses.get(venue.id) or SunlightStatus.unknown()
            attached.append(venue.with_status(status))
            verdict = counts_as_sunny(status)
            if verdict is True:
                sunny += 1
            elif verdict is False:
                shaded += 1
            else:
                unknown += 1

        log.debug(f"일조 판정 완료 venues:{len(venues)} sunny:{sunny} shaded:{shaded} unknown:{unknown}")

        return ClassificationResult(
            venues=attached,
            statuses=statuses,
            sunny_count=sunny,
            shaded_count=shaded,
            unknown_count=unknown,
            buildings_analyzed=len(usable),
            buildings_skipped=skipped,
        )
