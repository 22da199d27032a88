"""Preferences API adapter - HTTP client for the user's display preferences."""

import logging

import requests

from practical.config import Config, load_config
from practical.core.preferences import Preferences

logger = logging.getLogger(__name__)

PREFERENCES_ENDPOINT = "/user/preferences"


class ConfigurationError(Exception):
    """Raised when required settings are missing."""

    pass


class PreferencesError(Exception):
    """Raised when preferences cannot be loaded or saved."""

    pass


class PreferencesAPIAdapter:
    """
    Preferences API adapter.

    Implements PreferencesRepository protocol. Handles the bearer token and
    HTTP calls. No business logic - just I/O.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or load_config()
        if not self.config.api_base_url:
            raise ConfigurationError("Missing API_BASE_URL. Add it to config/practical.conf")
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.config.api_token:
            return {}
        return {"Authorization": f"Bearer {self.config.api_token}"}

    def _api_request(self, method: str, endpoint: str, payload: dict | None = None) -> dict:
        """Make authenticated API request."""
        resp = self._session.request(
            method,
            f"{self.config.api_base_url}{endpoint}",
            headers=self._headers(),
            json=payload,
            timeout=self.config.request_timeout,
        )
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise PreferencesError(f"Invalid preferences response: {e}") from e
        if not isinstance(data, dict):
            raise PreferencesError(f"Unexpected preferences payload: {type(data).__name__}")
        return data

    def fetch(self) -> Preferences:
        """Fetch the user's preferences."""
        logger.debug("Fetching user preferences")
        return Preferences.from_api(self._api_request("GET", PREFERENCES_ENDPOINT))

    def update(self, changes: dict) -> Preferences:
        """Update preferences. Keys use the API's camelCase names."""
        return Preferences.from_api(self._api_request("PATCH", PREFERENCES_ENDPOINT, changes))

    def reset(self) -> Preferences:
        """Reset preferences to server defaults."""
        return Preferences.from_api(self._api_request("POST", f"{PREFERENCES_ENDPOINT}/reset"))
