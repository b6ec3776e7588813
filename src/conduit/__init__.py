"""Typed HTTP/JSON API client built on requests."""

__version__ = "0.1.0"
