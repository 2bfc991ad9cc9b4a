"""
Building provider port interface.

This module defines the protocol for building lookups.
"""

from typing import List, Protocol
from sunlit.core.models import BoundingBox, Building, Coordinates

class BuildingProvider(Protocol):
    """건물 제공자 포트 인터페이스"""

    async def find_by_bounding_box(self, bbox: BoundingBox) -> List[Building]:
        """경계 상자 안의 건물을 조회합니다."""
        ...

    async def find_nearby(self, center: Coordinates, radius_m: float) -> List[Building]:
        """중심점 반경 안의 건물을 조회합니다."""
        ...
