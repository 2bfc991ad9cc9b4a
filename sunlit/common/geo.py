"""
Geographic utilities for sunlit.

This module provides geodesic calculations on a spherical earth:
haversine distance, initial bearing, destination point and the
angle normalization helpers shared by the solar and shadow modules.
"""

import math
from typing import Iterable, Tuple

# 지구 평균 반지름 (미터)
EARTH_RADIUS_M = 6_371_000.0

TWO_PI = 2.0 * math.pi


def to_radians(degrees: float) -> float:
    """도를 라디안으로 변환합니다."""
    return degrees * math.pi / 180.0


def to_degrees(radians: float) -> float:
    """라디안을 도로 변환합니다."""
    return radians * 180.0 / math.pi


def normalize_radians(angle: float) -> float:
    """
    각도를 [0, 2π) 범위로 정규화합니다.

    Args:
        angle: 라디안 각도 (음수, 2π 초과 허용)

    Returns:
        [0, 2π) 범위의 각도
    """
    result = math.fmod(angle, TWO_PI)
    if result < 0:
        result += TWO_PI
    # 아주 작은 음수는 더했을 때 정확히 2π가 될 수 있음
    if result >= TWO_PI:
        result = 0.0
    return result


def normalize_degrees(angle: float) -> float:
    """각도를 [0, 360) 범위로 정규화합니다."""
    result = math.fmod(angle, 360.0)
    if result < 0:
        result += 360.0
    if result >= 360.0:
        result = 0.0
    return result


def smallest_angle_between(a: float, b: float) -> float:
    """
    두 방향(라디안) 사이의 가장 작은 각도를 계산합니다.

    Returns:
        [0, π] 범위의 각도
    """
    diff = abs(normalize_radians(a) - normalize_radians(b))
    return min(diff, TWO_PI - diff)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다 (미터).

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (미터)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    # 부동소수점 오차로 1을 넘는 경우 방지
    c = 2 * math.asin(math.sqrt(min(1.0, a)))

    return c * EARTH_RADIUS_M


def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    첫 번째 지점에서 두 번째 지점으로 향하는 초기 방위각을 계산합니다.

    방위각은 진북 기준 시계 방향이며 라디안 [0, 2π) 범위입니다.
    두 지점이 같으면 0을 반환합니다.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    y = math.sin(dlon) * math.cos(lat2_rad)
    x = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon))

    return normalize_radians(math.atan2(y, x))


def destination_point(lat: float, lon: float, bearing: float, distance_m: float) -> Tuple[float, float]:
    """
    시작점에서 방위각과 거리만큼 이동한 지점을 계산합니다.

    Args:
        lat: 시작 위도
        lon: 시작 경도
        bearing: 진북 기준 방위각 (라디안)
        distance_m: 이동 거리 (미터)

    Returns:
        (위도, 경도)
    """
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    delta = distance_m / EARTH_RADIUS_M

    lat2 = math.asin(math.sin(lat_rad) * math.cos(delta) +
                     math.cos(lat_rad) * math.sin(delta) * math.cos(bearing))
    lon2 = lon_rad + math.atan2(math.sin(bearing) * math.sin(delta) * math.cos(lat_rad),
                                math.cos(delta) - math.sin(lat_rad) * math.sin(lat2))

    # 경도를 [-180, 180) 범위로 되돌림
    lon2_deg = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    return (math.degrees(lat2), lon2_deg)


def bounding_radius(lat: float, lon: float, ring: Iterable[Tuple[float, float]]) -> float:
    """
    기준점에서 외곽선 꼭짓점까지의 최대 거리를 계산합니다 (미터).

    Args:
        lat: 기준점 위도
        lon: 기준점 경도
        ring: 외곽선 꼭짓점들 [(위도, 경도), ...]

    Returns:
        최대 거리, 꼭짓점이 없으면 0.0
    """
    radius = 0.0
    for vlat, vlon in ring:
        radius = max(radius, haversine_distance(lat, lon, vlat, vlon))
    return radius


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유한하고 유효한 범위인지 확인합니다.

    Args:
        lat: 위도
        lon: 경도

    Returns:
        좌표가 유효하면 True
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180
