"""
Core domain models and pure functions for sunlit.

This module contains the solar geometry, shadow occlusion and
classification logic, independent of external I/O.
"""

from .models import (
    BoundingBox, Building, Coordinates, SunlightKind, SunlightStatus,
    SunPosition, SunTimes, Venue, VenueType,
)
from .solar import SolarConfig, SolarPositionCalculator
from .shadow import OcclusionConfig, ShadowOccluder
from .classification import ClassificationResult, SunlightClassificationService

__all__ = [
    "BoundingBox", "Building", "Coordinates", "SunlightKind", "SunlightStatus",
    "SunPosition", "SunTimes", "Venue", "VenueType",
    "SolarConfig", "SolarPositionCalculator",
    "OcclusionConfig", "ShadowOccluder",
    "ClassificationResult", "SunlightClassificationService",
]
