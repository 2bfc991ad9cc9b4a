"""
Adapters for sunlit.

This module contains the adapters that implement the port interfaces
against external services.
"""
