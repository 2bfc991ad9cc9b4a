"""
Sun calculator port interface.

This module defines the protocol the orchestrators use for solar
geometry, so a calculator can be swapped or mocked in tests.
"""

from datetime import date, datetime
from typing import Protocol, Union
from sunlit.core.models import Coordinates, SunPosition, SunTimes

class SunCalculatorPort(Protocol):
    """태양 계산 포트 인터페이스"""

    def get_position(self, coordinates: Coordinates, timestamp: datetime) -> SunPosition:
        ...

    def get_sun_times(self, coordinates: Coordinates, day: Union[date, datetime]) -> SunTimes:
        ...

    def is_daytime(self, coordinates: Coordinates, timestamp: datetime) -> bool:
        ...
