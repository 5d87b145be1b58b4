"""
Config module - Typed application settings
"""

from .settings import Settings, get_settings

__all__ = [
    'Settings',
    'get_settings'
]
