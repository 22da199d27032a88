"""Preferences repository interface."""

from typing import Protocol

from practical.core.preferences import Preferences


class PreferencesRepository(Protocol):
    """Interface for loading the user's display preferences from any backend."""

    def fetch(self) -> Preferences:
        """Fetch the current preferences. May raise on transport failure."""
        ...
