"""
Overpass venue provider for sunlit.

This module implements VenueProvider on top of the Overpass API and
parses amenity elements into Venue entities.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from sunlit.core.models import BoundingBox, Coordinates, Venue
from sunlit.core.tags import build_address, parse_venue_type
from sunlit.observability.logging_setup import get_logger
from .client import OverpassClient
from .queries import around_filter, bbox_filter, venue_by_id_query, venue_query

log = get_logger("sunlit.overpass.venues")

OSM_TYPES = ("node", "way", "relation")


def element_center(element: Dict[str, Any]) -> Optional[tuple]:
    """
    요소의 대표 좌표를 구합니다.

    node 는 lat/lon, "out center" 응답은 center, "out geom" 응답은
    bounds 중심 또는 geometry 꼭짓점 평균을 사용합니다.
    """
    if element.get("lat") is not None and element.get("lon") is not None:
        return (element["lat"], element["lon"])

    center = element.get("center")
    if center and center.get("lat") is not None and center.get("lon") is not None:
        return (center["lat"], center["lon"])

    bounds = element.get("bounds")
    if bounds and all(bounds.get(k) is not None for k in ("minlat", "minlon", "maxlat", "maxlon")):
        return ((bounds["minlat"] + bounds["maxlat"]) / 2, (bounds["minlon"] + bounds["maxlon"]) / 2)

    geometry = [p for p in element.get("geometry") or [] if p]
    if geometry:
        # 닫힌 외곽선은 마지막 점이 첫 점과 같으므로 제외
        if len(geometry) > 1 and geometry[0] == geometry[-1]:
            geometry = geometry[:-1]
        lat = sum(p["lat"] for p in geometry) / len(geometry)
        lon = sum(p["lon"] for p in geometry) / len(geometry)
        return (lat, lon)

    return None


def element_to_venue(element: Dict[str, Any]) -> Optional[Venue]:
    """
    Overpass 요소를 Venue 로 변환합니다.

    이름이 없거나, 지원하지 않는 amenity 이거나, 좌표가 유효하지 않으면 None.
    """
    tags = element.get("tags") or {}
    name = tags.get("name")
    if not name:
        return None

    venue_type = parse_venue_type(tags.get("amenity"))
    if venue_type is None:
        return None

    try:
        center = element_center(element)
        if center is None:
            return None

        return Venue(
            id=f"{element.get('type')}/{element.get('id')}",
            name=name,
            type=venue_type,
            coordinates=Coordinates(latitude=center[0], longitude=center[1]),
            has_outdoor_seating=tags.get("outdoor_seating") == "yes",
            address=build_address(tags),
            phone=tags.get("phone"),
            website=tags.get("website"),
            opening_hours=tags.get("opening_hours"),
        )
    except (ValidationError, KeyError, TypeError) as e:
        log.warning(f"장소 요소 변환 실패 건너뜀 id:{element.get('id')} error:{e!r}")
        return None


def parse_venues(response: Dict[str, Any]) -> List[Venue]:
    venues = []
    for element in response.get("elements", []):
        venue = element_to_venue(element)
        if venue is not None:
            venues.append(venue)
    return venues


class OverpassVenueProvider:
    """Overpass 기반 장소 제공자"""

    def __init__(self, client: Optional[OverpassClient] = None, query_timeout: int = 30):
        self.client = client or OverpassClient()
        self.query_timeout = query_timeout

    async def find_by_bounding_box(self, bbox: BoundingBox) -> List[Venue]:
        response = await self.client.execute(venue_query(bbox_filter(bbox), self.query_timeout))
        venues = parse_venues(response)
        log.info(f"경계 상자 장소 조회 count:{len(venues)}")
        return venues

    async def find_nearby(self, center: Coordinates, radius_m: float) -> List[Venue]:
        response = await self.client.execute(venue_query(around_filter(center, radius_m), self.query_timeout))
        venues = parse_venues(response)
        log.info(f"반경 장소 조회 radius_m:{radius_m} count:{len(venues)}")
        return venues

    async def find_by_id(self, venue_id: str) -> Optional[Venue]:
        """ID 형식은 "node/123456" 입니다."""
        osm_type, _, osm_id = venue_id.partition("/")
        if osm_type not in OSM_TYPES or not osm_id.isdigit():
            return None

        response = await self.client.execute(venue_by_id_query(osm_type, osm_id))
        venues = parse_venues(response)
        return venues[0] if venues else None
