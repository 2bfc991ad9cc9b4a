"""sunlit: sunlit vs. shaded outdoor venues from solar geometry and building shadows."""

__version__ = "0.1.0"
