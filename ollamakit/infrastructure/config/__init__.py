"""Configuration package."""

from .settings import OllamaSettings, get_settings, reload_settings

__all__ = ['OllamaSettings', 'get_settings', 'reload_settings']
