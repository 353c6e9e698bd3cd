"""Mindify mental-health support API."""

__version__ = "1.0.0"
