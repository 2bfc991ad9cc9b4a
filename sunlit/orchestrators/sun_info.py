"""
Sun info orchestrator for sunlit.

This module answers "where is the sun and when does it set" for a
single point and instant.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel

from sunlit.core.models import Coordinates, SunPosition, SunTimes
from sunlit.core.solar import ensure_utc
from sunlit.observability import metrics
from sunlit.observability.logging_setup import get_logger
from sunlit.ports.solar import SunCalculatorPort

log = get_logger("sunlit.sun_info")


class SunInfoResult(BaseModel):
    position: SunPosition
    times: SunTimes
    is_daytime: bool

    def to_payload(self) -> dict:
        return {
            "position": {
                "azimuthDegrees": self.position.azimuth_degrees,
                "altitudeDegrees": self.position.altitude_degrees,
                "isAboveHorizon": self.position.is_above_horizon,
            },
            "times": self.times.to_payload(),
            "isDaytime": self.is_daytime,
        }


class GetSunInfo:
    """태양 정보 조회"""

    def __init__(self,
                 sun_calculator: SunCalculatorPort,
                 clock: Optional[Callable[[], datetime]] = None):
        self.sun_calculator = sun_calculator
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, latitude: float, longitude: float, at: Optional[datetime] = None) -> SunInfoResult:
        """
        지점과 시각의 태양 위치, 당일 이벤트 시각, 낮 여부를 반환합니다.

        Raises:
            pydantic.ValidationError: 좌표가 범위를 벗어난 경우
        """
        coordinates = Coordinates(latitude=latitude, longitude=longitude)
        moment = ensure_utc(at) if at is not None else self.clock()
        metrics.queries_total.labels(kind="sun_info").inc()

        position = self.sun_calculator.get_position(coordinates, moment)
        times = self.sun_calculator.get_sun_times(coordinates, moment)
        is_daytime = self.sun_calculator.is_daytime(coordinates, moment)

        log.debug(f"태양 정보 계산 lat:{latitude} lon:{longitude} altitude:{position.altitude_degrees:.2f}")
        return SunInfoResult(position=position, times=times, is_daytime=is_daytime)
