"""
geo 모듈 단위 테스트

이 모듈은 거리, 방위각, 각도 정규화 함수를 테스트합니다.
"""

import math

import pytest
from hypothesis import given, strategies as st

from sunlit.common.geo import (
    TWO_PI,
    bounding_radius,
    destination_point,
    haversine_distance,
    initial_bearing,
    normalize_degrees,
    normalize_radians,
    smallest_angle_between,
    to_degrees,
    to_radians,
    validate_coordinates,
)


class TestAngleHelpers:
    """각도 변환/정규화 테스트"""

    def test_degree_radian_conversion(self):
        """도/라디안 변환 테스트"""
        assert to_radians(180.0) == pytest.approx(math.pi)
        assert to_degrees(math.pi / 2) == pytest.approx(90.0)

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0),
        (-math.pi / 2, 3 * math.pi / 2),
        (TWO_PI, 0.0),
        (5 * math.pi, math.pi),
    ])
    def test_normalize_radians(self, angle, expected):
        """라디안 정규화 테스트"""
        assert normalize_radians(angle) == pytest.approx(expected)

    def test_normalize_degrees(self):
        """도 정규화 테스트"""
        assert normalize_degrees(-90.0) == pytest.approx(270.0)
        assert normalize_degrees(720.0) == 0.0

    @given(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False))
    def test_normalize_radians_range(self, angle):
        """정규화 결과는 항상 [0, 2π)"""
        result = normalize_radians(angle)
        assert 0.0 <= result < TWO_PI

    @given(
        st.floats(min_value=-20, max_value=20, allow_nan=False),
        st.floats(min_value=-20, max_value=20, allow_nan=False),
    )
    def test_smallest_angle_symmetric_and_bounded(self, a, b):
        """최소 각도는 대칭이고 [0, π] 범위"""
        d = smallest_angle_between(a, b)
        assert 0.0 <= d <= math.pi + 1e-12
        assert d == pytest.approx(smallest_angle_between(b, a), abs=1e-9)

    def test_smallest_angle_wraps_around_north(self):
        """북쪽을 가로지르는 두 방향"""
        assert smallest_angle_between(math.radians(350), math.radians(10)) == pytest.approx(math.radians(20))


class TestDistanceAndBearing:
    """거리/방위각 테스트"""

    def test_haversine_zero(self):
        """같은 지점의 거리는 0"""
        assert haversine_distance(40.0, -3.0, 40.0, -3.0) == 0.0

    def test_haversine_one_degree_latitude(self):
        """위도 1도는 약 111km"""
        assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)

    @pytest.mark.parametrize("lat2,lon2,expected_deg", [
        (41.0, 0.0, 0.0),
        (40.0, 1.0, 90.0),
        (39.0, 0.0, 180.0),
        (40.0, -1.0, 270.0),
    ])
    def test_initial_bearing_cardinal(self, lat2, lon2, expected_deg):
        """기본 방위 테스트"""
        bearing = math.degrees(initial_bearing(40.0, 0.0, lat2, lon2))
        assert bearing == pytest.approx(expected_deg, abs=1.0)

    def test_initial_bearing_identical_points(self):
        """같은 지점의 방위각은 0"""
        assert initial_bearing(10.0, 10.0, 10.0, 10.0) == 0.0

    @given(
        lat=st.floats(min_value=-60, max_value=60),
        lon=st.floats(min_value=-170, max_value=170),
        bearing_deg=st.floats(min_value=0, max_value=359.9),
        distance=st.floats(min_value=5, max_value=2000),
    )
    def test_destination_point_roundtrip(self, lat, lon, bearing_deg, distance):
        """이동한 지점까지의 거리와 방위각이 입력과 일치"""
        lat2, lon2 = destination_point(lat, lon, math.radians(bearing_deg), distance)
        assert haversine_distance(lat, lon, lat2, lon2) == pytest.approx(distance, rel=1e-6)
        bearing = initial_bearing(lat, lon, lat2, lon2)
        assert smallest_angle_between(bearing, math.radians(bearing_deg)) < 1e-3

    def test_bounding_radius(self):
        """외곽선 최대 거리 테스트"""
        ring = [destination_point(40.0, 0.0, math.radians(b), d) for b, d in ((0, 10), (90, 25), (180, 15))]
        assert bounding_radius(40.0, 0.0, ring) == pytest.approx(25.0, rel=1e-6)
        assert bounding_radius(40.0, 0.0, []) == 0.0


class TestValidateCoordinates:
    """좌표 검증 테스트"""

    @pytest.mark.parametrize("lat,lon,expected", [
        (0.0, 0.0, True),
        (90.0, 180.0, True),
        (90.1, 0.0, False),
        (0.0, -180.5, False),
        (math.nan, 0.0, False),
        (0.0, math.inf, False),
    ])
    def test_validate_coordinates(self, lat, lon, expected):
        """좌표 유효성 테스트"""
        assert validate_coordinates(lat, lon) is expected
