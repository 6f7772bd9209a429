"""Helpers for batch scheduling: node filtering and scoring, a priority queue and version info."""

__version__ = "0.4.2"

__all__ = ["__version__"]