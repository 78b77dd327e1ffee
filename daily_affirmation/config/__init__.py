"""Configuration module for Daily Affirmation."""

from .settings import Config
from .languages import LANG_CONFIG, localized

__all__ = [
    'Config',
    'LANG_CONFIG',
    'localized',
]
