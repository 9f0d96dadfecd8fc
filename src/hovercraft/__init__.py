"""Hybrid exact and fuzzy search over hover documentation."""

__version__ = "0.1.0"
