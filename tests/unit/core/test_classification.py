"""
일괄 일조 판정 서비스 단위 테스트
"""

import math
from unittest.mock import Mock

from sunlit.core.classification import SunlightClassificationService
from sunlit.core.models import Building, Coordinates, SunlightKind, SunlightStatus


class TestSunlightClassificationService:
    """일괄 판정 테스트"""

    def test_counts(self, make_venue, make_sun):
        """SUNNY 2 + SHADED 1 → sunny 2, shaded 1"""
        venues = [make_venue("node/1"), make_venue("node/2"), make_venue("node/3")]
        occluder = Mock()
        occluder.analyze_venues.return_value = {
            "node/1": SunlightStatus.sunny(),
            "node/2": SunlightStatus.shaded(0.9),
            "node/3": SunlightStatus.sunny(),
        }
        service = SunlightClassificationService(occluder)

        result = service.classify(venues, [], make_sun())

        assert result.sunny_count == 2
        assert result.shaded_count == 1
        assert result.unknown_count == 0
        assert [v.sunlight_status.kind for v in result.venues] == [
            SunlightKind.SUNNY, SunlightKind.SHADED, SunlightKind.SUNNY
        ]
        # 입력 장소는 변경되지 않음
        assert all(v.sunlight_status is None for v in venues)

    def test_partial_and_night_count_as_shaded(self, make_venue, make_sun):
        """PARTIALLY_SUNNY 와 NIGHT 는 shaded 로 집계, UNKNOWN 은 제외"""
        venues = [make_venue("node/1"), make_venue("node/2"), make_venue("node/3")]
        occluder = Mock()
        occluder.analyze_venues.return_value = {
            "node/1": SunlightStatus.partially_sunny(0.5),
            "node/2": SunlightStatus.night(),
            "node/3": SunlightStatus.unknown(),
        }

        result = SunlightClassificationService(occluder).classify(venues, [], make_sun())

        assert result.sunny_count == 0
        assert result.shaded_count == 2
        assert result.unknown_count == 1

    def test_missing_status_is_unknown(self, make_venue, make_sun):
        """판정 결과가 없는 장소는 UNKNOWN"""
        occluder = Mock()
        occluder.analyze_venues.return_value = {}

        result = SunlightClassificationService(occluder).classify([make_venue("node/1")], [], make_sun())

        assert result.venues[0].sunlight_status.kind is SunlightKind.UNKNOWN
        assert result.unknown_count == 1

    def test_empty_batch(self, make_sun):
        """빈 입력"""
        result = SunlightClassificationService().classify([], [], make_sun())

        assert result.venues == []
        assert result.sunny_count == 0
        assert result.shaded_count == 0

    def test_malformed_buildings_filtered(self, make_venue, make_building, make_sun):
        """유효하지 않은 건물은 판정 전에 제외"""
        bad = Building.model_construct(
            id="way/bad",
            coordinates=Coordinates.model_construct(latitude=math.nan, longitude=0.0),
            height=None,
            levels=None,
            footprint=None,
        )
        occluder = Mock()
        occluder.analyze_venues.return_value = {"node/1": SunlightStatus.sunny()}
        good = make_building()

        result = SunlightClassificationService(occluder).classify([make_venue("node/1")], [bad, good], make_sun())

        assert result.buildings_analyzed == 1
        assert result.buildings_skipped == 1
        passed_buildings = occluder.analyze_venues.call_args[0][1]
        assert passed_buildings == (good,)

    def test_with_real_occluder(self, make_venue, make_building, make_sun, offset):
        """실제 판정기와 함께: 그림자 안 1곳, 밖 2곳"""
        b_lat, b_lon = 40.4168, -3.7038
        building = make_building(lat=b_lat, lon=b_lon, height=20.0)
        in_shadow = make_venue("node/1", *offset(b_lat, b_lon, 0, 10))
        south = make_venue("node/2", *offset(b_lat, b_lon, 180, 10))
        far = make_venue("node/3", *offset(b_lat, b_lon, 0, 200))

        result = SunlightClassificationService().classify(
            [in_shadow, south, far], [building], make_sun(altitude_deg=45, azimuth_deg=180)
        )

        assert result.statuses["node/1"].kind is SunlightKind.SHADED
        assert result.sunny_count == 2
        assert result.shaded_count == 1
