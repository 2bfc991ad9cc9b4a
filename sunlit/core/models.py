"""
Core domain models for sunlit.

This module defines the value objects (coordinates, sun position,
sun times, sunlight status) and the venue/building entities using
Pydantic v2 for validation.
"""

import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sunlit.common.geo import normalize_degrees, normalize_radians, to_degrees


class Coordinates(BaseModel):
    """위경도 좌표. 범위를 벗어나거나 유한하지 않으면 생성 실패"""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class BoundingBox(BaseModel):
    """위경도 경계 상자 (south, west, north, east)"""
    model_config = ConfigDict(frozen=True)

    south: float = Field(ge=-90, le=90, allow_inf_nan=False)
    west: float = Field(ge=-180, le=180, allow_inf_nan=False)
    north: float = Field(ge=-90, le=90, allow_inf_nan=False)
    east: float = Field(ge=-180, le=180, allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_order(self):
        if self.south > self.north:
            raise ValueError("south must not exceed north")
        # 날짜변경선을 가로지르는 상자는 지원하지 않음
        if self.west > self.east:
            raise ValueError("west must not exceed east")
        return self

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lon_span(self) -> float:
        return self.east - self.west

    def center(self) -> Coordinates:
        return Coordinates(
            latitude=(self.south + self.north) / 2,
            longitude=(self.west + self.east) / 2,
        )


class SunPosition(BaseModel):
    """
    태양 위치 값 객체.

    altitude 는 지평선 기준 고도(라디안), azimuth 는 진북 기준 시계 방향
    방위각(라디안)이며 생성 시 [0, 2π) 로 정규화됩니다.
    """
    model_config = ConfigDict(frozen=True)

    altitude: float = Field(gt=-math.pi / 2, le=math.pi / 2, allow_inf_nan=False)
    azimuth: float = Field(allow_inf_nan=False)
    timestamp: datetime

    @field_validator("azimuth")
    @classmethod
    def _normalize_azimuth(cls, value: float) -> float:
        return normalize_radians(value)

    @classmethod
    def from_south_based(cls, altitude: float, azimuth: float, timestamp: datetime) -> "SunPosition":
        """
        남쪽 기준(서쪽이 양수) 방위각으로부터 생성합니다.

        천문 계산식의 시간각 기반 방위각은 남쪽 기준이므로 π 를 더해
        진북 기준으로 변환합니다.
        """
        return cls(altitude=altitude, azimuth=azimuth + math.pi, timestamp=timestamp)

    @property
    def altitude_degrees(self) -> float:
        return to_degrees(self.altitude)

    @property
    def azimuth_degrees(self) -> float:
        return normalize_degrees(to_degrees(self.azimuth))

    @property
    def is_above_horizon(self) -> bool:
        return self.altitude > 0


class SunTimes(BaseModel):
    """
    하루의 태양 이벤트 시각.

    극야/백야 등으로 이벤트가 발생하지 않는 경우 해당 필드는 None 입니다.
    """
    model_config = ConfigDict(frozen=True)

    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    solar_noon: Optional[datetime] = None
    golden_hour: Optional[datetime] = None

    def to_payload(self) -> dict:
        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value is not None else None

        return {
            "sunrise": _iso(self.sunrise),
            "sunset": _iso(self.sunset),
            "solarNoon": _iso(self.solar_noon),
            "goldenHour": _iso(self.golden_hour),
        }


class SunlightKind(str, Enum):
    SUNNY = "sunny"
    PARTIALLY_SUNNY = "partially_sunny"
    SHADED = "shaded"
    NIGHT = "night"
    UNKNOWN = "unknown"


# 표시 계층에서 번역되는 안정적인 사유 키
REASON_DIRECT_SUNLIGHT = "sunlight.description.directSunlight"
REASON_IN_BUILDING_SHADOW = "sunlight.description.inBuildingShadow"
REASON_PARTIAL_SHADOW = "sunlight.description.partialShadow"
REASON_SUN_BELOW_HORIZON = "sunlight.description.sunBelowHorizon"
REASON_UNKNOWN = "sunlight.description.unknown"

# 동일 신뢰도일 때 더 제한적인 분류가 우선
RESTRICTIVENESS = {
    SunlightKind.SUNNY: 0,
    SunlightKind.PARTIALLY_SUNNY: 1,
    SunlightKind.SHADED: 2,
    SunlightKind.NIGHT: 3,
    SunlightKind.UNKNOWN: -1,
}


class SunlightStatus(BaseModel):
    """일조 상태 (kind + 신뢰도 + 사유 키)"""
    model_config = ConfigDict(frozen=True)

    kind: SunlightKind
    confidence: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    reason: Optional[str] = None

    @classmethod
    def sunny(cls, confidence: float = 1.0) -> "SunlightStatus":
        return cls(kind=SunlightKind.SUNNY, confidence=confidence, reason=REASON_DIRECT_SUNLIGHT)

    @classmethod
    def partially_sunny(cls, confidence: float) -> "SunlightStatus":
        return cls(kind=SunlightKind.PARTIALLY_SUNNY, confidence=confidence, reason=REASON_PARTIAL_SHADOW)

    @classmethod
    def shaded(cls, confidence: float = 1.0) -> "SunlightStatus":
        return cls(kind=SunlightKind.SHADED, confidence=confidence, reason=REASON_IN_BUILDING_SHADOW)

    @classmethod
    def night(cls) -> "SunlightStatus":
        return cls(kind=SunlightKind.NIGHT, confidence=1.0, reason=REASON_SUN_BELOW_HORIZON)

    @classmethod
    def unknown(cls) -> "SunlightStatus":
        return cls(kind=SunlightKind.UNKNOWN, confidence=0.0, reason=REASON_UNKNOWN)

    def to_payload(self) -> dict:
        return {"status": self.kind.value, "confidence": self.confidence, "reason": self.reason}


def counts_as_sunny(status: SunlightStatus) -> Optional[bool]:
    """
    지금 햇빛이 드는지의 이진 판정.

    Returns:
        SUNNY 이면 True, SHADED/PARTIALLY_SUNNY/NIGHT 이면 False,
        UNKNOWN 이면 None (어느 쪽으로도 집계하지 않음)
    """
    kind = status.kind
    if kind is SunlightKind.SUNNY:
        return True
    if kind in (SunlightKind.SHADED, SunlightKind.PARTIALLY_SUNNY, SunlightKind.NIGHT):
        return False
    if kind is SunlightKind.UNKNOWN:
        return None
    raise ValueError(f"처리되지 않은 일조 상태: {kind}")


class VenueType(str, Enum):
    BAR = "bar"
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    PUB = "pub"
    BIERGARTEN = "biergarten"


class Building(BaseModel):
    """건물 엔티티. 높이가 가림 판정의 기준값"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    coordinates: Coordinates
    height: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    levels: Optional[int] = Field(default=None, ge=0)
    footprint: Optional[List[Coordinates]] = None


class Venue(BaseModel):
    """야외 좌석 후보 장소 엔티티"""

    id: str = Field(min_length=1)
    name: str
    type: VenueType
    coordinates: Coordinates
    has_outdoor_seating: bool = False
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[str] = None
    sunlight_status: Optional[SunlightStatus] = None

    def with_status(self, status: SunlightStatus) -> "Venue":
        """일조 상태가 부착된 사본을 반환합니다."""
        return self.model_copy(update={"sunlight_status": status})

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "latitude": self.coordinates.latitude,
            "longitude": self.coordinates.longitude,
            "outdoorSeating": self.has_outdoor_seating,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "openingHours": self.opening_hours,
            "sunlightStatus": self.sunlight_status.to_payload() if self.sunlight_status else None,
        }
