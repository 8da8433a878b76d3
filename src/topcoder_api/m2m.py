"""Machine-to-machine token issuance via the Auth0 client-credentials grant.

Tokens are cached per client ID and re-issued once they are within
``token_cache_time`` seconds of expiring.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import httpx

from topcoder_api.config import Config
from topcoder_api.exceptions import MachineTokenError
from topcoder_api.models.auth import MachineToken

logger = logging.getLogger(__name__)


class MachineTokenIssuer:
    """Issues and caches M2M tokens for Topcoder service identities."""

    def __init__(self, config: Config, http: httpx.Client | None = None) -> None:
        settings = config.settings
        self._auth0_url = settings.auth0_url
        self._audience = settings.auth0_audience
        self._proxy_url = settings.auth0_proxy_server_url
        self._cache_time = timedelta(seconds=settings.token_cache_time)
        self._tokens: dict[str, tuple[str, datetime]] = {}
        self._http = http or httpx.Client(timeout=settings.http_timeout)

    def get_machine_token(self, client_id: str, client_secret: str) -> str:
        """Return a cached token for ``client_id`` or issue a new one."""
        cached = self._tokens.get(client_id)
        if cached is not None:
            token, expires_at = cached
            if datetime.now() + self._cache_time < expires_at:
                return token

        token_data = self._issue(client_id, client_secret)
        expires_at = datetime.now() + timedelta(seconds=token_data.expires_in)
        self._tokens[client_id] = (token_data.access_token, expires_at)
        return token_data.access_token

    def _issue(self, client_id: str, client_secret: str) -> MachineToken:
        body = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "audience": self._audience,
        }
        url = self._auth0_url
        if self._proxy_url:
            body["auth0_url"] = self._auth0_url
            url = self._proxy_url

        logger.debug(f"Requesting M2M token for client {client_id} from {url}")
        try:
            response = self._http.post(url, json=body)
            response.raise_for_status()
            return MachineToken(**response.json())
        except httpx.HTTPError as e:
            raise MachineTokenError(f"Failed to get M2M token from {url}: {e}", cause=e) from e
        except (ValueError, TypeError) as e:
            raise MachineTokenError(f"Invalid M2M token response from {url}", cause=e) from e

    def clear(self) -> None:
        """Forget every cached token."""
        self._tokens.clear()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
