"""Roadmap tracker utilities."""

from .config import RoadmapSettings, load_settings, configure_logging

__all__ = [
    "RoadmapSettings",
    "load_settings",
    "configure_logging",
]
