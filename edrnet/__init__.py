"""Spatial random networks (CDR/EDR models) driven by a distance histogram."""

__version__ = "0.1.0"
