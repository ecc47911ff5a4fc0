"""Gaia: reverse-geocoding proxy-cache."""

__version__ = "0.3.0"
