"""Token acquisition for the Topcoder API.

Two strategies are supported:

* the legacy exchange: a v2 login (id token + refresh token) followed by a v3
  authorization call that returns the access token, cached on the provider;
* machine-to-machine tokens, delegated to :class:`MachineTokenIssuer`, which
  does its own caching.

Known quirk: a cached legacy token is treated as valid while its ``iat``
(issued-at) claim lies in the *future*. This is the behavior the upstream
integration has always had; do not flip the comparison.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any

import httpx
import jwt

from topcoder_api.config import Config
from topcoder_api.exceptions import AuthenticationError, AuthorizationError
from topcoder_api.m2m import MachineTokenIssuer
from topcoder_api.models.auth import CachedToken, TokenStatus
from topcoder_api.utils.paths import get_path

logger = logging.getLogger(__name__)


def decode_claims(token: str) -> dict[str, Any] | None:
    """Decode JWT claims without verifying the signature. None if undecodable."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None


def _timestamp(claims: dict[str, Any], name: str) -> datetime | None:
    value = claims.get(name)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    return None


class TokenProvider:
    """Supplies bearer tokens for Topcoder API calls."""

    def __init__(
        self,
        config: Config,
        http: httpx.Client | None = None,
        issuer: MachineTokenIssuer | None = None,
    ) -> None:
        self._config = config
        self._http = http or httpx.Client(timeout=config.settings.http_timeout)
        self._issuer = issuer or MachineTokenIssuer(config, http=self._http)
        self._cached: CachedToken | None = None

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a legacy access token, re-running the exchange when needed."""
        if not force_refresh and self._cached is not None and self._is_token_valid(self._cached.token):
            return self._cached.token

        token = self._exchange()
        claims = decode_claims(token) or {}
        self._cached = CachedToken(
            token=token,
            issued_at=_timestamp(claims, "iat"),
            expires_at=_timestamp(claims, "exp"),
        )
        return token

    def get_machine_token(self, client_id: str | None = None, client_secret: str | None = None) -> str:
        """Get an M2M token, defaulting to the configured Auth0 client."""
        settings = self._config.settings
        return self._issuer.get_machine_token(
            client_id or settings.auth0_client_id,
            client_secret or settings.auth0_client_secret,
        )

    def get_status(self) -> TokenStatus:
        """Get the current legacy token status."""
        if self._cached is None:
            return TokenStatus(has_token=False, is_valid=False)
        return TokenStatus(
            has_token=True,
            is_valid=self._is_token_valid(self._cached.token),
            issued_at=self._cached.issued_at,
            expires_at=self._cached.expires_at,
        )

    def clear(self) -> None:
        """Drop the cached legacy token and every cached M2M token."""
        self._cached = None
        self._issuer.clear()

    @staticmethod
    def _is_token_valid(token: str) -> bool:
        """Valid while the issued-at claim is later than now (see module docstring)."""
        claims = decode_claims(token)
        if not claims:
            return False
        iat = claims.get("iat")
        if not isinstance(iat, (int, float)):
            return False
        return iat > time.time()

    def _exchange(self) -> str:
        """Run the two-step legacy login: authenticate, then authorize."""
        authn_url = self._config.settings.authn_url
        authz_url = self._config.settings.authz_url

        try:
            response = self._http.post(authn_url, json=self._config.get_authn_payload())
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AuthenticationError(f"cannot authenticate with topcoder: {authn_url}", cause=e) from e

        id_token = get_path(data, "id_token")
        refresh_token = get_path(data, "refresh_token")
        if not id_token or not refresh_token:
            raise AuthenticationError(f"cannot authenticate with topcoder: {authn_url}")

        logger.debug(f"Authenticated with {authn_url}, exchanging id token at {authz_url}")
        try:
            response = self._http.post(
                authz_url,
                json={"param": {"externalToken": id_token, "refreshToken": refresh_token}},
                headers={"Authorization": f"Bearer {id_token}"},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AuthorizationError(f"cannot authorize with topcoder: {authz_url}", cause=e) from e

        token = get_path(data, "result.content.token")
        if not token:
            raise AuthorizationError(f"cannot authorize with topcoder: {authz_url}")
        return token

    def close(self) -> None:
        """Close the underlying HTTP clients."""
        self._issuer.close()
        self._http.close()
