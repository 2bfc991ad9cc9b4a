"""
Venue provider port interface.

This module defines the protocol for venue lookups.
"""

from typing import List, Optional, Protocol
from sunlit.core.models import BoundingBox, Coordinates, Venue

class VenueProvider(Protocol):
    """장소 제공자 포트 인터페이스"""

    async def find_by_bounding_box(self, bbox: BoundingBox) -> List[Venue]:
        """
        경계 상자 안의 장소를 조회합니다.

        Args:
            bbox: 경계 상자
        """
        ...

    async def find_nearby(self, center: Coordinates, radius_m: float) -> List[Venue]:
        """
        중심점 반경 안의 장소를 조회합니다.

        Args:
            center: 중심 좌표
            radius_m: 반경 (미터)
        """
        ...

    async def find_by_id(self, venue_id: str) -> Optional[Venue]:
        """
        ID로 장소를 조회합니다.

        Returns:
            장소 또는 None
        """
        ...
