"""
Configuration and environment setup.

Settings are read from the process environment and an optional .env file.
"""

from .settings import Settings, get_settings

__all__ = ['Settings', 'get_settings']
