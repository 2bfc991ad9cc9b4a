"""
OSM 태그 파싱 단위 테스트
"""

import pytest

from sunlit.core.models import VenueType
from sunlit.core.tags import (
    build_address,
    estimate_height,
    parse_height,
    parse_height_value,
    parse_levels,
    parse_venue_type,
)


class TestHeightParsing:
    """높이 태그 파싱 테스트"""

    @pytest.mark.parametrize("raw,expected", [
        ("10", 10.0),
        ("10m", 10.0),
        ("10 m", 10.0),
        ("12.5", 12.5),
        ("12,5", 12.5),
        ("7 metres", 7.0),
        ("30 ft", 9.144),
        ("30'", 9.144),
    ])
    def test_valid_values(self, raw, expected):
        """지원 형식 테스트"""
        assert parse_height_value(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "tall", "0", "-5", "10 floors", "~12"])
    def test_invalid_values(self, raw):
        """해석 불가 또는 0 이하는 None"""
        assert parse_height_value(raw) is None

    def test_height_key_precedence(self):
        """height 가 building:height 보다 우선"""
        assert parse_height({"height": "15", "building:height": "30"}) == 15.0
        assert parse_height({"height": "unknown", "building:height": "30"}) == 30.0
        assert parse_height({}) is None


class TestLevelsParsing:
    """층수 태그 파싱 테스트"""

    @pytest.mark.parametrize("tags,expected", [
        ({"building:levels": "4"}, 4),
        ({"levels": "3"}, 3),
        ({"building:levels": "5;6"}, 5),
        ({"building:levels": "0", "levels": "2"}, 2),
        ({"building:levels": "many"}, None),
        ({}, None),
    ])
    def test_levels(self, tags, expected):
        """층수 테스트"""
        assert parse_levels(tags) == expected


class TestEstimateHeight:
    """높이 추정 테스트"""

    def test_fallback_table(self):
        """높이 → 층수 × 층고 → 기본값"""
        assert estimate_height(18.0, 2) == 18.0
        assert estimate_height(None, 4) == 12.0
        assert estimate_height(None, None) == 10.0
        assert estimate_height(None, 4, meters_per_level=3.5) == 14.0
        assert estimate_height(None, 0, default_height_m=8.0) == 8.0


class TestVenueTags:
    """장소 태그 테스트"""

    def test_venue_type(self):
        """amenity 매핑"""
        assert parse_venue_type("cafe") is VenueType.CAFE
        assert parse_venue_type(" Biergarten ") is VenueType.BIERGARTEN
        assert parse_venue_type("bank") is None
        assert parse_venue_type(None) is None

    def test_address(self):
        """주소 조합"""
        tags = {"addr:street": "Calle Mayor", "addr:housenumber": "5", "addr:city": "Madrid"}
        assert build_address(tags) == "Calle Mayor, 5, Madrid"
        assert build_address({}) is None
