"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import asyncio
import math
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from sunlit.common.geo import destination_point
from sunlit.core.models import Building, Coordinates, SunPosition, Venue, VenueType
from sunlit.settings import Settings


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    return settings


@pytest.fixture
def make_venue():
    """테스트용 Venue 생성 함수"""
    def _make(venue_id="node/1", lat=40.4168, lon=-3.7038, outdoor=True, name="Terraza"):
        return Venue(
            id=venue_id,
            name=name,
            type=VenueType.BAR,
            coordinates=Coordinates(latitude=lat, longitude=lon),
            has_outdoor_seating=outdoor,
        )
    return _make


@pytest.fixture
def make_building():
    """테스트용 Building 생성 함수"""
    def _make(building_id="way/1", lat=40.4168, lon=-3.7038, height=20.0, levels=None):
        return Building(
            id=building_id,
            coordinates=Coordinates(latitude=lat, longitude=lon),
            height=height,
            levels=levels,
        )
    return _make


@pytest.fixture
def make_sun():
    """진북 기준 방위각/고도(도)로 SunPosition 생성"""
    def _make(altitude_deg=45.0, azimuth_deg=180.0):
        return SunPosition(
            altitude=math.radians(altitude_deg),
            azimuth=math.radians(azimuth_deg),
            timestamp=datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc),
        )
    return _make


@pytest.fixture
def offset():
    """기준점에서 방위각(도)/거리(미터)만큼 떨어진 좌표"""
    def _offset(lat, lon, bearing_deg, distance_m):
        return destination_point(lat, lon, math.radians(bearing_deg), distance_m)
    return _offset


@pytest.fixture
def mock_venue_provider():
    """테스트용 장소 제공자"""
    provider = AsyncMock()
    provider.find_by_bounding_box.return_value = []
    provider.find_nearby.return_value = []
    provider.find_by_id.return_value = None
    return provider


@pytest.fixture
def mock_building_provider():
    """테스트용 건물 제공자"""
    provider = AsyncMock()
    provider.find_by_bounding_box.return_value = []
    provider.find_nearby.return_value = []
    return provider


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "asyncio: 비동기 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)

        # 느린 테스트 마커 추가
        if "performance" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)
