"""
Port interfaces for sunlit hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .venues import VenueProvider
from .buildings import BuildingProvider
from .solar import SunCalculatorPort

__all__ = ["VenueProvider", "BuildingProvider", "SunCalculatorPort"]
