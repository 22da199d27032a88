"""File-based preferences storage adapter."""

import json
from pathlib import Path

from practical.core.preferences import DEFAULT_PREFERENCES, Preferences

from .preferences_api import PreferencesError


class FilePreferencesStore:
    """
    File-based preferences storage.

    Implements PreferencesRepository protocol. Preferences live in a single
    JSON file using the API's field names.
    """

    def __init__(self, path: Path | str, defaults: Preferences = DEFAULT_PREFERENCES):
        self.path = Path(path).expanduser()
        self.defaults = defaults

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise PreferencesError(f"Corrupt preferences file {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def fetch(self) -> Preferences:
        """Read preferences. A missing file yields the defaults."""
        return Preferences.from_api({**self.defaults.to_api(), **self._read()})

    def update(self, changes: dict) -> Preferences:
        """Merge changes into the stored preferences."""
        data = {**self._read(), **changes}
        self._write(data)
        return self.fetch()

    def reset(self) -> Preferences:
        """Remove stored preferences, going back to the defaults."""
        if self.path.exists():
            self.path.unlink()
        return self.fetch()
