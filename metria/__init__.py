"""Metria: business-viability calculator for innovation projects."""

__version__ = "0.1.0"
