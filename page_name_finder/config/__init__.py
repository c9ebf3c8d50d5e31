"""Configuration management for the page name finder."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
