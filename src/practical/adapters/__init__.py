"""Adapters - I/O implementations of ports."""

from .preferences_api import ConfigurationError, PreferencesAPIAdapter, PreferencesError
from .file_preferences import FilePreferencesStore

__all__ = [
    "ConfigurationError",
    "PreferencesAPIAdapter",
    "PreferencesError",
    "FilePreferencesStore",
]
