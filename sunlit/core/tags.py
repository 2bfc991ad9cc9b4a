"""
OpenStreetMap tag parsing for sunlit.

This module turns free-text building and amenity tags into typed
values. Height and level parsing follow one fallback table:

    height tag / building:height tag  -> metres (feet converted)
    building:levels tag / levels tag  -> levels x METERS_PER_LEVEL
    neither                           -> DEFAULT_HEIGHT_M
"""

import re
from typing import Mapping, Optional

from .constants import DEFAULT_HEIGHT_M, METERS_PER_LEVEL
from .models import VenueType

FEET_TO_M = 0.3048

HEIGHT_KEYS = ("height", "building:height")
LEVEL_KEYS = ("building:levels", "levels")

_HEIGHT_RE = re.compile(
    r"^\s*(?P<value>\d+(?:[.,]\d+)?)\s*(?P<unit>m|meters?|metres?|ft|feet|foot|')?\s*$",
    re.IGNORECASE,
)
_LEVELS_RE = re.compile(r"^\s*(?P<value>\d+)")

_AMENITY_TYPES = {
    "bar": VenueType.BAR,
    "restaurant": VenueType.RESTAURANT,
    "cafe": VenueType.CAFE,
    "pub": VenueType.PUB,
    "biergarten": VenueType.BIERGARTEN,
}


def parse_height_value(raw: Optional[str]) -> Optional[float]:
    """
    높이 문자열을 미터로 변환합니다.

    "10", "10m", "10 m", "12,5", "30 ft", "30'" 형식을 지원합니다.

    Args:
        raw: 태그 원문

    Returns:
        양수 높이(미터) 또는 None
    """
    if raw is None:
        return None
    match = _HEIGHT_RE.match(str(raw))
    if not match:
        return None

    value = float(match.group("value").replace(",", "."))
    unit = (match.group("unit") or "m").lower()
    if unit in ("ft", "feet", "foot", "'"):
        value *= FEET_TO_M

    return value if value > 0 else None


def parse_height(tags: Mapping[str, str]) -> Optional[float]:
    """height, building:height 순으로 높이를 읽습니다."""
    for key in HEIGHT_KEYS:
        value = parse_height_value(tags.get(key))
        if value is not None:
            return value
    return None


def parse_levels(tags: Mapping[str, str]) -> Optional[int]:
    """building:levels, levels 순으로 층수를 읽습니다."""
    for key in LEVEL_KEYS:
        raw = tags.get(key)
        if raw is None:
            continue
        match = _LEVELS_RE.match(str(raw))
        if match:
            levels = int(match.group("value"))
            if levels > 0:
                return levels
    return None


def estimate_height(
    height: Optional[float],
    levels: Optional[int],
    *,
    meters_per_level: float = METERS_PER_LEVEL,
    default_height_m: float = DEFAULT_HEIGHT_M
) -> float:
    """
    가림 판정에 사용할 건물 높이를 결정합니다.

    Args:
        height: 명시적 높이 (미터)
        levels: 층수
        meters_per_level: 한 층 높이
        default_height_m: 둘 다 없을 때의 기본 높이

    Returns:
        높이 (미터)
    """
    if height is not None and height > 0:
        return height
    if levels is not None and levels > 0:
        return levels * meters_per_level
    return default_height_m


def parse_venue_type(amenity: Optional[str]) -> Optional[VenueType]:
    if amenity is None:
        return None
    return _AMENITY_TYPES.get(amenity.strip().lower())


def build_address(tags: Mapping[str, str]) -> Optional[str]:
    parts = [tags.get("addr:street"), tags.get("addr:housenumber"), tags.get("addr:city")]
    parts = [p for p in parts if p]
    return ", ".join(parts) if parts else None
