"""Configuration module - Settings and constants."""

from mws_api.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
