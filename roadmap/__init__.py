"""Roadmap tracker - sequential learning steps with gated progression."""

__version__ = "0.1.0"
