"""
Overpass building provider for sunlit.

This module implements BuildingProvider on top of the Overpass API.
Height and levels come from the tag parser; footprints come from the
element geometry when the query asked for it.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from sunlit.core.models import BoundingBox, Building, Coordinates
from sunlit.core.tags import parse_height, parse_levels
from sunlit.observability.logging_setup import get_logger
from .client import OverpassClient
from .queries import around_filter, bbox_filter, building_query
from .venues import element_center

log = get_logger("sunlit.overpass.buildings")


def element_to_building(element: Dict[str, Any]) -> Optional[Building]:
    """Overpass 요소를 Building 으로 변환합니다. 변환 불가 시 None"""
    tags = element.get("tags") or {}
    try:
        center = element_center(element)
        if center is None:
            return None

        footprint = None
        geometry = element.get("geometry")
        if geometry:
            footprint = [Coordinates(latitude=p["lat"], longitude=p["lon"]) for p in geometry]

        return Building(
            id=f"{element.get('type')}/{element.get('id')}",
            coordinates=Coordinates(latitude=center[0], longitude=center[1]),
            height=parse_height(tags),
            levels=parse_levels(tags),
            footprint=footprint,
        )
    except (ValidationError, KeyError, TypeError) as e:
        log.warning(f"건물 요소 변환 실패 건너뜀 id:{element.get('id')} error:{e!r}")
        return None


def parse_buildings(response: Dict[str, Any]) -> List[Building]:
    buildings = []
    for element in response.get("elements", []):
        building = element_to_building(element)
        if building is not None:
            buildings.append(building)
    return buildings


class OverpassBuildingProvider:
    """Overpass 기반 건물 제공자"""

    def __init__(self, client: Optional[OverpassClient] = None, query_timeout: int = 30):
        self.client = client or OverpassClient()
        self.query_timeout = query_timeout

    async def find_by_bounding_box(self, bbox: BoundingBox) -> List[Building]:
        response = await self.client.execute(building_query(bbox_filter(bbox), self.query_timeout))
        buildings = parse_buildings(response)
        log.info(f"경계 상자 건물 조회 count:{len(buildings)}")
        return buildings

    async def find_nearby(self, center: Coordinates, radius_m: float) -> List[Building]:
        response = await self.client.execute(building_query(around_filter(center, radius_m), self.query_timeout))
        buildings = parse_buildings(response)
        log.info(f"반경 건물 조회 radius_m:{radius_m} count:{len(buildings)}")
        return buildings
