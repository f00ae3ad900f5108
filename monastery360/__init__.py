"""Monastery360: read-only catalogue of monasteries, events and virtual tours."""

__version__ = "1.0.0"
