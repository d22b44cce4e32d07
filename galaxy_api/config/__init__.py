# _*_ coding: utf-8 _*_
"""Configuration package."""
from galaxy_api.config.simple_settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
