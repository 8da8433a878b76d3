"""Base API client for the Topcoder REST API.

Handles bearer header injection, request tracing and error normalization.
No retries: every failure is converted and raised straight away.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from topcoder_api.auth import TokenProvider
from topcoder_api.config import Config
from topcoder_api.exceptions import convert_topcoder_api_error
from topcoder_api.models.requests import RequestDescriptor

logger = logging.getLogger(__name__)

# Request traces (endpoint, parameters, status, payload) go to their own logger
# so they can be routed to a file without the rest of the debug output.
trace_logger = logging.getLogger("topcoder_api.trace")


def _dump(data: Any) -> str:
    """Serialize a payload for trace output, never raising."""
    try:
        return json.dumps(data, default=str)
    except (TypeError, ValueError):
        return repr(data)


class TopcoderClient:
    """HTTP client for the Topcoder API with M2M auth and error normalization."""

    def __init__(
        self,
        config: Config,
        tokens: TokenProvider,
        http: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._tokens = tokens
        self._http = http or httpx.Client(timeout=config.settings.http_timeout)

    @property
    def config(self) -> Config:
        return self._config

    def url(self, path: str, *segments: Any, v3: bool = False) -> str:
        """Join a path onto the configured v5 (or v3) base URL.

        Extra ``segments`` (ids, handles) are percent-encoded and appended,
        e.g. ``url("/challenges", challenge_id)``.
        """
        base = self._config.settings.api_url_v3 if v3 else self._config.settings.api_url
        encoded = "".join(f"/{quote(str(segment), safe='')}" for segment in segments)
        return base.rstrip("/") + path + encoded

    def request(
        self,
        method: str,
        url: str,
        *,
        description: str,
        body: Any = None,
        authenticate: bool = True,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one call and return the decoded JSON body (None if empty).

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            url: Absolute URL, see :meth:`url`.
            description: Message for the UpstreamRequestError raised on failure.
            body: JSON request body.
            authenticate: Attach an M2M bearer token.
            headers: Additional headers to include.
            params: Query parameters.

        Raises:
            UpstreamRequestError: On any transport, HTTP status or decoding failure.
        """
        descriptor = RequestDescriptor(
            method=method,
            url=url,
            body=body,
            params=params or {},
            headers=self._build_headers(body, authenticate, headers),
        )
        parameters = _dump(body if body is not None else params)

        try:
            response = self._http.request(
                descriptor.method,
                descriptor.url,
                json=descriptor.body,
                params=descriptor.params or None,
                headers=descriptor.headers,
            )
            response.raise_for_status()
            data = response.json() if response.content else None
        except (httpx.HTTPError, ValueError) as e:
            trace_logger.info(
                f"EndPoint: {descriptor.endpoint}, parameters: {parameters}, Status Code: null, "
                f"Error: '{description}', Details: {e}"
            )
            error = convert_topcoder_api_error(e, description)
            if error.response_data is not None:
                logger.error(f"Response Data: {_dump(error.response_data)}")
            raise error from e

        trace_logger.info(
            f"EndPoint: {descriptor.endpoint}, parameters: {parameters}, "
            f"Status Code: {response.status_code}, Response: {_dump(data)}"
        )
        return data

    def get(self, url: str, **kwargs: Any) -> Any:
        """Convenience method for GET requests."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Any:
        """Convenience method for POST requests."""
        return self.request("POST", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> Any:
        """Convenience method for PATCH requests."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Any:
        """Convenience method for DELETE requests."""
        return self.request("DELETE", url, **kwargs)

    def _build_headers(
        self,
        body: Any,
        authenticate: bool,
        extra_headers: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Build request headers with the bearer token."""
        headers: dict[str, str] = {}
        if authenticate:
            headers["Authorization"] = f"Bearer {self._tokens.get_machine_token()}"
        if body is not None:
            headers["Content-Type"] = "application/json"
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def close(self) -> None:
        """Close the underlying HTTP client and token provider."""
        self._http.close()
        self._tokens.close()

    def __enter__(self) -> TopcoderClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
