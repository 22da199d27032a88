"""Ports - interfaces/protocols for external dependencies."""

from .preferences_repo import PreferencesRepository

__all__ = [
    "PreferencesRepository",
]
