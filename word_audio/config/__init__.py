"""Configuration module for the word audio application"""

from .settings import AppSettings, LoggingSettings, SyncSettings, validate_word_pattern
from .store import SettingsStore

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "SyncSettings",
    "SettingsStore",
    "validate_word_pattern",
]
