"""Config module - application settings."""

from .settings import Settings, settings

__all__ = ['Settings', 'settings']
