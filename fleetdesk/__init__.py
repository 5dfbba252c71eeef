"""Maintenance tracking core for a small fleet of ships."""

__version__ = "0.1.0"
