"""Nearby pharmacy lookup for Izmir."""

__version__ = "0.1.0"
