"""
도메인 모델 단위 테스트

이 모듈은 좌표, 경계 상자, 태양 위치, 일조 상태 모델을 테스트합니다.
"""

import math
from datetime import datetime, timezone

import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError

from sunlit.core.models import (
    RESTRICTIVENESS,
    BoundingBox,
    Coordinates,
    SunlightKind,
    SunlightStatus,
    SunPosition,
    SunTimes,
    Venue,
    VenueType,
    counts_as_sunny,
)

TS = datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc)


class TestCoordinates:
    """좌표 모델 테스트"""

    def test_valid(self):
        """유효한 좌표"""
        c = Coordinates(latitude=40.4168, longitude=-3.7038)
        assert c.as_tuple() == (40.4168, -3.7038)

    @pytest.mark.parametrize("lat,lon", [
        (91.0, 0.0),
        (-90.5, 0.0),
        (0.0, 181.0),
        (math.nan, 0.0),
        (0.0, math.inf),
    ])
    def test_invalid_rejected(self, lat, lon):
        """범위 밖 또는 비유한 좌표는 생성 실패"""
        with pytest.raises(ValidationError):
            Coordinates(latitude=lat, longitude=lon)

    def test_frozen(self):
        """좌표는 불변"""
        c = Coordinates(latitude=1.0, longitude=2.0)
        with pytest.raises(ValidationError):
            c.latitude = 3.0


class TestBoundingBox:
    """경계 상자 테스트"""

    def test_span_and_center(self):
        """변 길이와 중심"""
        bbox = BoundingBox(south=40.41, west=-3.71, north=40.43, east=-3.69)
        assert bbox.lat_span == pytest.approx(0.02)
        assert bbox.lon_span == pytest.approx(0.02)
        assert bbox.center().latitude == pytest.approx(40.42)
        assert bbox.center().longitude == pytest.approx(-3.70)

    def test_inverted_rejected(self):
        """south > north 인 상자는 거부"""
        with pytest.raises(ValidationError):
            BoundingBox(south=41.0, west=0.0, north=40.0, east=1.0)


class TestSunPosition:
    """태양 위치 모델 테스트"""

    def test_from_south_based_near_north(self):
        """남쪽 기준 3.14 rad 는 진북 기준 거의 360도"""
        pos = SunPosition.from_south_based(altitude=1.0, azimuth=3.14, timestamp=TS)
        assert pos.azimuth_degrees == pytest.approx(359.909, abs=0.01)
        assert pos.altitude_degrees == pytest.approx(57.2958, abs=1e-3)

    def test_from_south_based_due_south(self):
        """남쪽 기준 0 은 진북 기준 180도"""
        pos = SunPosition.from_south_based(altitude=0.5, azimuth=0.0, timestamp=TS)
        assert pos.azimuth_degrees == pytest.approx(180.0)

    def test_azimuth_normalized(self):
        """음수 방위각은 [0, 2π) 로 정규화"""
        pos = SunPosition(altitude=0.2, azimuth=-math.pi / 2, timestamp=TS)
        assert pos.azimuth == pytest.approx(3 * math.pi / 2)

    def test_altitude_out_of_range(self):
        """고도는 (-π/2, π/2]"""
        with pytest.raises(ValidationError):
            SunPosition(altitude=2.0, azimuth=0.0, timestamp=TS)

    def test_altitude_bounds(self):
        """천정(π/2)은 허용, 천저(-π/2)는 거부"""
        assert SunPosition(altitude=math.pi / 2, azimuth=0.0, timestamp=TS).altitude_degrees == pytest.approx(90.0)
        with pytest.raises(ValidationError):
            SunPosition(altitude=-math.pi / 2, azimuth=0.0, timestamp=TS)

    @given(
        altitude=st.floats(min_value=-math.pi / 2, max_value=math.pi / 2, exclude_min=True),
        azimuth=st.floats(min_value=0, max_value=2 * math.pi, exclude_max=True),
    )
    def test_degrees_roundtrip(self, altitude, azimuth):
        """도 단위 값을 다시 라디안으로 변환하면 원래 값"""
        pos = SunPosition(altitude=altitude, azimuth=azimuth, timestamp=TS)
        assert math.radians(pos.altitude_degrees) == pytest.approx(altitude, abs=1e-9)
        back = math.radians(pos.azimuth_degrees)
        diff = abs(back - pos.azimuth)
        assert min(diff, 2 * math.pi - diff) < 1e-9

    def test_is_above_horizon(self):
        """지평선 위 여부"""
        assert SunPosition(altitude=0.1, azimuth=0.0, timestamp=TS).is_above_horizon
        assert not SunPosition(altitude=0.0, azimuth=0.0, timestamp=TS).is_above_horizon


class TestSunTimes:
    """태양 이벤트 시각 테스트"""

    def test_payload_with_missing_events(self):
        """발생하지 않는 이벤트는 None"""
        times = SunTimes(solar_noon=TS)
        payload = times.to_payload()
        assert payload["sunrise"] is None
        assert payload["goldenHour"] is None
        assert payload["solarNoon"] == TS.isoformat()


class TestSunlightStatus:
    """일조 상태 테스트"""

    def test_factories(self):
        """팩토리 기본값"""
        assert SunlightStatus.sunny().confidence == 1.0
        assert SunlightStatus.night().kind is SunlightKind.NIGHT
        assert SunlightStatus.unknown().confidence == 0.0
        assert SunlightStatus.shaded(0.8).reason == "sunlight.description.inBuildingShadow"

    def test_confidence_bounds(self):
        """신뢰도는 [0, 1]"""
        with pytest.raises(ValidationError):
            SunlightStatus(kind=SunlightKind.SUNNY, confidence=1.5)
        with pytest.raises(ValidationError):
            SunlightStatus(kind=SunlightKind.SUNNY, confidence=math.nan)

    def test_restrictiveness_order(self):
        """제한 정도 순서"""
        order = sorted(RESTRICTIVENESS, key=RESTRICTIVENESS.get)
        assert order == [
            SunlightKind.UNKNOWN,
            SunlightKind.SUNNY,
            SunlightKind.PARTIALLY_SUNNY,
            SunlightKind.SHADED,
            SunlightKind.NIGHT,
        ]

    @pytest.mark.parametrize("status,expected", [
        (SunlightStatus.sunny(), True),
        (SunlightStatus.partially_sunny(0.5), False),
        (SunlightStatus.shaded(), False),
        (SunlightStatus.night(), False),
        (SunlightStatus.unknown(), None),
    ])
    def test_counts_as_sunny(self, status, expected):
        """이진 일조 판정"""
        assert counts_as_sunny(status) is expected


class TestVenue:
    """장소 엔티티 테스트"""

    def test_with_status_returns_copy(self):
        """상태 부착은 사본을 반환"""
        venue = Venue(
            id="node/1",
            name="Terraza",
            type=VenueType.CAFE,
            coordinates=Coordinates(latitude=40.0, longitude=-3.0),
        )
        attached = venue.with_status(SunlightStatus.sunny())

        assert venue.sunlight_status is None
        assert attached.sunlight_status.kind is SunlightKind.SUNNY
        payload = attached.to_payload()
        assert payload["sunlightStatus"]["status"] == "sunny"
        assert payload["type"] == "cafe"
