"""
Overpass QL query builders for sunlit.
"""

from sunlit.core.models import BoundingBox, Coordinates, VenueType

VENUE_AMENITIES = tuple(t.value for t in VenueType)


def bbox_filter(bbox: BoundingBox) -> str:
    return f"({bbox.south},{bbox.west},{bbox.north},{bbox.east})"


def around_filter(center: Coordinates, radius_m: float) -> str:
    return f"(around:{radius_m:g},{center.latitude},{center.longitude})"


def venue_query(area_filter: str, timeout: int = 30) -> str:
    """장소(amenity) 조회 쿼리. node 와 way 모두 포함"""
    selectors = []
    for element in ("node", "way"):
        for amenity in VENUE_AMENITIES:
            selectors.append(f'  {element}["amenity"="{amenity}"]{area_filter};')
    body = "\n".join(selectors)
    return f"[out:json][timeout:{timeout}];\n(\n{body}\n);\nout center;"


def venue_by_id_query(osm_type: str, osm_id: str, timeout: int = 10) -> str:
    return f"[out:json][timeout:{timeout}];\n{osm_type}({osm_id});\nout center;"


def building_query(area_filter: str, timeout: int = 30) -> str:
    """건물 조회 쿼리. 외곽선 추정을 위해 geometry 와 bounds 를 요청"""
    return (
        f"[out:json][timeout:{timeout}];\n"
        f"(\n"
        f'  way["building"]{area_filter};\n'
        f'  relation["building"]{area_filter};\n'
        f");\n"
        f"out geom;"
    )
