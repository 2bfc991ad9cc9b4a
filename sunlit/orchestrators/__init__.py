"""
Orchestrators for sunlit.

This module contains the use cases that coordinate the flow
between provider ports and the solar/shadow core.
"""
from .sunny_venues import GetSunnyVenues, SunnyVenuesQuery, SunnyVenuesResult
from .sun_info import GetSunInfo, SunInfoResult

__all__ = ["GetSunnyVenues", "SunnyVenuesQuery", "SunnyVenuesResult", "GetSunInfo", "SunInfoResult"]
