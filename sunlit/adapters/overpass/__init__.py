"""
Overpass API adapters for sunlit.
"""

from .client import OverpassClient
from .venues import OverpassVenueProvider
from .buildings import OverpassBuildingProvider

__all__ = ["OverpassClient", "OverpassVenueProvider", "OverpassBuildingProvider"]
