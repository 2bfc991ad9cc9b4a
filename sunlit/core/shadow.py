"""
Shadow occlusion for sunlit.

This module classifies a venue as sunny, partially sunny, shaded or
in darkness from one sun position and the surrounding buildings.

Each building casts a shadow of length ``height / tan(altitude)``
(clamped) in the direction opposite the sun. A venue is inside a
building's shadow when it lies within that length and within the
occlusion cone ``atan(radius / distance)`` around the shadow direction.
A slightly longer and wider band around that region counts as partial
shade. The candidate with the highest confidence wins; at equal
confidence the more restrictive classification wins.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from sunlit.common.geo import (
    haversine_distance,
    initial_bearing,
    bounding_radius,
    normalize_radians,
    smallest_angle_between,
    validate_coordinates,
)
from sunlit.observability.logging_setup import get_logger
from .constants import (
    ANGULAR_SLACK,
    DEFAULT_BUILDING_RADIUS_M,
    DEFAULT_HEIGHT_M,
    MAX_SHADOW_LENGTH_M,
    METERS_PER_LEVEL,
    MIN_DISTANCE_M,
    PARTIAL_ANGLE_SLACK,
    PARTIAL_LENGTH_SLACK,
    PARTIAL_MAX_CONFIDENCE,
    PARTIAL_MIN_CONFIDENCE,
    SHADED_BASE_CONFIDENCE,
)
from .models import RESTRICTIVENESS, Building, SunlightStatus, SunPosition, Venue
from .tags import estimate_height

log = get_logger("sunlit.shadow")


class OcclusionConfig(BaseModel):
    default_height_m: float = Field(default=DEFAULT_HEIGHT_M, gt=0)
    meters_per_level: float = Field(default=METERS_PER_LEVEL, gt=0)
    max_shadow_length_m: float = Field(default=MAX_SHADOW_LENGTH_M, gt=0)
    default_building_radius_m: float = Field(default=DEFAULT_BUILDING_RADIUS_M, gt=0)
    angular_slack: float = Field(default=ANGULAR_SLACK, ge=1.0)
    partial_length_slack: float = Field(default=PARTIAL_LENGTH_SLACK, ge=1.0)
    partial_angle_slack: float = Field(default=PARTIAL_ANGLE_SLACK, ge=1.0)
    min_distance_m: float = Field(default=MIN_DISTANCE_M, gt=0)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def is_usable_building(building: Building) -> bool:
    """건물 좌표와 외곽선이 모두 유한하고 범위 안인지 확인합니다."""
    coords = building.coordinates
    try:
        if not validate_coordinates(coords.latitude, coords.longitude):
            return False
        for vertex in building.footprint or ():
            if not validate_coordinates(vertex.latitude, vertex.longitude):
                return False
    except (AttributeError, TypeError):
        return False
    return True


def outranks(candidate: SunlightStatus, current: SunlightStatus) -> bool:
    """신뢰도가 높은 쪽이, 같으면 더 제한적인 분류가 우선합니다."""
    if candidate.confidence != current.confidence:
        return candidate.confidence > current.confidence
    return RESTRICTIVENESS[candidate.kind] > RESTRICTIVENESS[current.kind]


def select_dominant(candidates: Iterable[SunlightStatus]) -> Optional[SunlightStatus]:
    best: Optional[SunlightStatus] = None
    for candidate in candidates:
        if best is None or outranks(candidate, best):
            best = candidate
    return best


class ShadowOccluder:
    """건물 그림자에 의한 일조 상태 판정기"""

    def __init__(self, config: Optional[OcclusionConfig] = None):
        self.config = config or OcclusionConfig()

    def building_height(self, building: Building) -> float:
        return estimate_height(
            building.height,
            building.levels,
            meters_per_level=self.config.meters_per_level,
            default_height_m=self.config.default_height_m,
        )

    def shadow_length(self, height: float, altitude: float) -> float:
        """
        그림자 길이를 계산합니다 (미터).

        고도가 낮을수록 길어지며 max_shadow_length_m 로 제한됩니다.
        """
        if altitude <= 0:
            return self.config.max_shadow_length_m
        tan_alt = math.tan(altitude)
        if tan_alt <= 0:
            return self.config.max_shadow_length_m
        return min(height / tan_alt, self.config.max_shadow_length_m)

    def effective_radius(self, building: Building) -> float:
        """외곽선이 있으면 외접 반경, 없으면 기본 건물 반경"""
        if building.footprint:
            lat, lon = building.coordinates.as_tuple()
            radius = bounding_radius(lat, lon, (v.as_tuple() for v in building.footprint))
            if radius > 0:
                return radius
        return self.config.default_building_radius_m

    def evaluate_building(
        self,
        venue: Venue,
        building: Building,
        sun_position: SunPosition,
        shadow_direction: float
    ) -> Optional[SunlightStatus]:
        """
        단일 건물이 장소를 가리는지 평가합니다.

        Args:
            venue: 평가할 장소
            building: 후보 건물
            sun_position: 태양 위치 (고도 > 0)
            shadow_direction: 그림자 방향 (라디안, 진북 기준)

        Returns:
            SHADED 또는 PARTIALLY_SUNNY 후보, 가리지 않으면 None
        """
        cfg = self.config
        length = self.shadow_length(self.building_height(building), sun_position.altitude)
        radius = self.effective_radius(building)

        blat, blon = building.coordinates.as_tuple()
        vlat, vlon = venue.coordinates.as_tuple()
        distance = haversine_distance(blat, blon, vlat, vlon)

        # 거리 사전 필터
        if distance > length + radius:
            return None

        # 건물 기준점 위의 장소는 방위각이 정의되지 않으므로 그림자 중심으로 취급
        if distance < cfg.min_distance_m:
            deviation = 0.0
        else:
            bearing = initial_bearing(blat, blon, vlat, vlon)
            deviation = smallest_angle_between(bearing, shadow_direction)

        tolerance = math.atan(radius / max(distance, cfg.min_distance_m)) * cfg.angular_slack

        if distance <= length and deviation <= tolerance:
            length_margin = 1.0 - distance / length if length > 0 else 1.0
            angle_margin = 1.0 - deviation / tolerance
            confidence = SHADED_BASE_CONFIDENCE + (1.0 - SHADED_BASE_CONFIDENCE) * (length_margin + angle_margin) / 2
            return SunlightStatus.shaded(_clamp(confidence))

        partial_length = length * cfg.partial_length_slack
        partial_tolerance = tolerance * cfg.partial_angle_slack
        if distance <= partial_length and deviation <= partial_tolerance:
            # 완전 가림 영역에서 벗어난 정도 (0 = 경계, 1 = 부분 영역 끝)
            length_excess = 0.0
            if distance > length and partial_length > length:
                length_excess = (distance - length) / (partial_length - length)
            angle_excess = 0.0
            if deviation > tolerance and partial_tolerance > tolerance:
                angle_excess = (deviation - tolerance) / (partial_tolerance - tolerance)
            excess = max(length_excess, angle_excess)
            confidence = PARTIAL_MAX_CONFIDENCE - (PARTIAL_MAX_CONFIDENCE - PARTIAL_MIN_CONFIDENCE) * excess
            return SunlightStatus.partially_sunny(_clamp(confidence))

        return None

    def analyze_venue(
        self,
        venue: Venue,
        buildings: Sequence[Building],
        sun_position: SunPosition
    ) -> SunlightStatus:
        """
        한 장소의 일조 상태를 판정합니다.

        Args:
            venue: 평가할 장소
            buildings: 주변 건물 목록 (읽기 전용)
            sun_position: 조회 기준 태양 위치

        Returns:
            SunlightStatus
        """
        if sun_position.altitude <= 0:
            return SunlightStatus.night()

        vlat, vlon = venue.coordinates.as_tuple()
        if not validate_coordinates(vlat, vlon):
            log.warning(f"장소 좌표가 유효하지 않아 판정 불가 venue:{venue.id}")
            return SunlightStatus.unknown()

        shadow_direction = normalize_radians(sun_position.azimuth + math.pi)

        candidates: List[SunlightStatus] = []
        for building in buildings:
            if not is_usable_building(building):
                log.warning(f"건물 좌표가 유효하지 않아 건너뜀 building:{getattr(building, 'id', '?')}")
                continue
            try:
                candidate = self.evaluate_building(venue, building, sun_position, shadow_direction)
            except (ValueError, ArithmeticError) as e:
                log.warning(f"건물 가림 계산 실패로 건너뜀 building:{building.id} error:{e}")
                continue
            if candidate is not None:
                candidates.append(candidate)

        best = select_dominant(candidates)
        return best if best is not None else SunlightStatus.sunny()

    def analyze_venues(
        self,
        venues: Iterable[Venue],
        buildings: Sequence[Building],
        sun_position: SunPosition
    ) -> Dict[str, SunlightStatus]:
        """
        여러 장소를 같은 건물 목록과 태양 위치로 판정합니다.

        Returns:
            장소 ID → SunlightStatus (순서 보장 없음)
        """
        buildings = tuple(buildings)
        return {venue.id: self.analyze_venue(venue, buildings, sun_position) for venue in venues}
