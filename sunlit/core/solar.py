"""
Solar position calculator for sunlit.

This module computes the sun's apparent altitude/azimuth for a point
and instant, and the daily sunrise/sunset/solar-noon/golden-hour
instants. It uses the low-precision analytical model (mean anomaly,
equation of centre, ecliptic longitude, sidereal time); accuracy is a
few arc-minutes, well inside what shadow classification needs.

All functions are pure. Events that do not happen on a given day
(polar day or night) are returned as None, never NaN.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple, Union

from pydantic import BaseModel

from .constants import (
    EVENT_REFINE_ITERATIONS,
    EVENT_REFINE_MAX_STEP_SEC,
    GOLDEN_HOUR_ALTITUDE_DEG,
    SUNRISE_ALTITUDE_DEG,
)
from .models import Coordinates, SunPosition, SunTimes

RAD = math.pi / 180.0

# 율리우스일 기준점
J1970 = 2440588.0
J2000 = 2451545.0
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECONDS_PER_DAY = 86400.0

# 지구 자전축 경사 (황도 경사)
OBLIQUITY = RAD * 23.4397

_NADIR_LIMIT = math.nextafter(-math.pi / 2, 0.0)

# 태양 통과 시각 보정 상수
J0 = 0.0009


class SolarConfig(BaseModel):
    golden_hour_altitude_deg: float = GOLDEN_HOUR_ALTITUDE_DEG
    sunrise_altitude_deg: float = SUNRISE_ALTITUDE_DEG


def ensure_utc(moment: datetime) -> datetime:
    """naive datetime 은 UTC 로 간주합니다."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def to_julian(moment: datetime) -> float:
    seconds = (ensure_utc(moment) - _UNIX_EPOCH).total_seconds()
    return seconds / _SECONDS_PER_DAY - 0.5 + J1970


def from_julian(j: float) -> datetime:
    return _UNIX_EPOCH + timedelta(days=j + 0.5 - J1970)


def to_days(moment: datetime) -> float:
    """J2000 기준 경과 일수"""
    return to_julian(moment) - J2000


# ---- 천체 좌표 ----

def right_ascension(l: float, b: float) -> float:
    return math.atan2(math.sin(l) * math.cos(OBLIQUITY) - math.tan(b) * math.sin(OBLIQUITY), math.cos(l))


def declination(l: float, b: float) -> float:
    return math.asin(math.sin(b) * math.cos(OBLIQUITY) + math.cos(b) * math.sin(OBLIQUITY) * math.sin(l))


def sidereal_time(d: float, lw: float) -> float:
    return RAD * (280.16 + 360.9856235 * d) - lw


def solar_mean_anomaly(d: float) -> float:
    return RAD * (357.5291 + 0.98560028 * d)


def ecliptic_longitude(m: float) -> float:
    # 중심차 + 근일점 황경
    c = RAD * (1.9148 * math.sin(m) + 0.02 * math.sin(2 * m) + 0.0003 * math.sin(3 * m))
    perihelion = RAD * 102.9372
    return m + c + perihelion + math.pi


def sun_coords(d: float) -> Tuple[float, float]:
    """
    태양의 적위와 적경을 계산합니다.

    Returns:
        (적위, 적경) 라디안
    """
    m = solar_mean_anomaly(d)
    l = ecliptic_longitude(m)
    return declination(l, 0.0), right_ascension(l, 0.0)


def _altitude(h: float, phi: float, dec: float) -> float:
    value = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(h)
    # 천저(-π/2)는 SunPosition 범위 밖이므로 바로 위 값으로 제한
    return max(_NADIR_LIMIT, math.asin(max(-1.0, min(1.0, value))))


def _azimuth_from_south(h: float, phi: float, dec: float) -> float:
    return math.atan2(math.sin(h), math.cos(h) * math.sin(phi) - math.tan(dec) * math.cos(phi))


# ---- 일출/일몰 ----

def julian_cycle(d: float, lw: float) -> float:
    return round(d - J0 - lw / (2 * math.pi))


def approx_transit(ht: float, lw: float, n: float) -> float:
    return J0 + (ht + lw) / (2 * math.pi) + n


def solar_transit_j(ds: float, m: float, l: float) -> float:
    # 균시차 보정
    return J2000 + ds + 0.0053 * math.sin(m) - 0.0069 * math.sin(2 * l)


def hour_angle(h: float, phi: float, dec: float) -> Optional[float]:
    """
    태양이 고도 h 에 도달하는 시간각을 계산합니다.

    Returns:
        시간각(라디안), 해당 고도를 지나지 않는 날(백야/극야)이면 None
    """
    denominator = math.cos(phi) * math.cos(dec)
    if abs(denominator) < 1e-12:
        return None
    value = (math.sin(h) - math.sin(phi) * math.sin(dec)) / denominator
    if value < -1.0 or value > 1.0:
        return None
    return math.acos(value)


class SolarPositionCalculator:
    """
    태양 위치 계산기.

    입출력과 상태가 없으며 같은 입력에 대해 항상 같은 결과를 반환합니다.
    """

    def __init__(self, config: Optional[SolarConfig] = None):
        self.config = config or SolarConfig()

    def get_position(self, coordinates: Coordinates, timestamp: datetime) -> SunPosition:
        """
        관측 지점과 시각에 대한 태양 고도/방위각을 계산합니다.

        Args:
            coordinates: 관측 지점
            timestamp: 시각 (naive 이면 UTC)

        Returns:
            SunPosition (방위각은 진북 기준)
        """
        lw = RAD * -coordinates.longitude
        phi = RAD * coordinates.latitude
        d = to_days(timestamp)

        dec, ra = sun_coords(d)
        h = sidereal_time(d, lw) - ra

        return SunPosition.from_south_based(
            altitude=_altitude(h, phi, dec),
            azimuth=_azimuth_from_south(h, phi, dec),
            timestamp=ensure_utc(timestamp),
        )

    def get_sun_times(self, coordinates: Coordinates, day: Union[date, datetime]) -> SunTimes:
        """
        해당 날짜의 일출, 일몰, 남중, 골든아워 시각을 계산합니다.

        date 가 주어지면 그 날 정오(UTC)를 기준으로 관측 지점 경도의
        태양일을 선택합니다. 발생하지 않는 이벤트는 None 입니다.

        Args:
            coordinates: 관측 지점
            day: 날짜 또는 시각

        Returns:
            SunTimes
        """
        if isinstance(day, datetime):
            moment = day
        else:
            moment = datetime.combine(day, time(12, 0), tzinfo=timezone.utc)

        lw = RAD * -coordinates.longitude
        phi = RAD * coordinates.latitude

        d = to_days(moment)
        n = julian_cycle(d, lw)
        ds = approx_transit(0.0, lw, n)

        m = solar_mean_anomaly(ds)
        l = ecliptic_longitude(m)
        dec = declination(l, 0.0)

        j_noon = solar_transit_j(ds, m, l)

        def _rise_set(altitude_deg: float) -> Tuple[Optional[datetime], Optional[datetime]]:
            w = hour_angle(altitude_deg * RAD, phi, dec)
            if w is None:
                return (None, None)
            j_set = solar_transit_j(approx_transit(w, lw, n), m, l)
            j_rise = j_noon - (j_set - j_noon)
            target = altitude_deg * RAD
            return (
                self._refine_event(coordinates, from_julian(j_rise), target),
                self._refine_event(coordinates, from_julian(j_set), target),
            )

        sunrise, sunset = _rise_set(self.config.sunrise_altitude_deg)
        _, golden_hour = _rise_set(self.config.golden_hour_altitude_deg)

        return SunTimes(
            sunrise=sunrise,
            sunset=sunset,
            solar_noon=from_julian(j_noon),
            golden_hour=golden_hour,
        )

    def _refine_event(self, coordinates: Coordinates, estimate: datetime, target_altitude: float) -> datetime:
        """
        근사 이벤트 시각을 위치 계산식의 고도가 목표 고도와 같아지도록 보정합니다.

        통과 시각 기준 적위로 구한 근사값은 수 분 어긋날 수 있어,
        get_position 과 같은 식으로 뉴턴 반복합니다. 고도 변화율이
        0 에 가까우면(태양이 목표 고도를 스치는 날) 근사값을 유지합니다.

        Args:
            coordinates: 관측 지점
            estimate: 근사 이벤트 시각
            target_altitude: 목표 고도 (라디안)

        Returns:
            보정된 시각
        """
        half_step = timedelta(seconds=30)
        moment = estimate
        for _ in range(EVENT_REFINE_ITERATIONS):
            before = self.get_position(coordinates, moment - half_step).altitude
            after = self.get_position(coordinates, moment + half_step).altitude
            rate = (after - before) / (2 * half_step.total_seconds())
            if abs(rate) < 1e-9:
                break
            error = self.get_position(coordinates, moment).altitude - target_altitude
            correction = max(-EVENT_REFINE_MAX_STEP_SEC, min(EVENT_REFINE_MAX_STEP_SEC, -error / rate))
            moment = moment + timedelta(seconds=correction)
            if abs(correction) < 0.5:
                break
        return moment

    def is_daytime(self, coordinates: Coordinates, timestamp: datetime) -> bool:
        """태양 고도가 0 보다 크면 낮입니다."""
        return self.get_position(coordinates, timestamp).altitude > 0
