"""Error taxonomy for Topcoder API calls.

Every failure surfaced by this package is a :class:`TopcoderError`. Endpoint
failures are normalized into :class:`UpstreamRequestError` by
:func:`convert_topcoder_api_error`; token failures keep their own kinds.
"""

from __future__ import annotations

from typing import Any

from topcoder_api.utils.paths import get_path


class TopcoderError(Exception):
    """Base class for all Topcoder client errors."""

    kind = "topcoder-error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class AuthenticationError(TopcoderError):
    """The legacy identity step did not yield an id token and a refresh token."""

    kind = "upstream-auth-failure"


class AuthorizationError(TopcoderError):
    """The legacy token exchange did not yield an access token."""

    kind = "upstream-auth-failure"


class MachineTokenError(TopcoderError):
    """The M2M credential issuer could not produce a token."""

    kind = "m2m-token-failure"


class UpstreamRequestError(TopcoderError):
    """An endpoint call failed at the transport or HTTP level."""

    kind = "upstream-request-failure"

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
        response_data: Any = None,
        upstream_message: str | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.status_code = status_code
        self.response_data = response_data
        self.upstream_message = upstream_message

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status_code"] = self.status_code
        if self.upstream_message:
            data["upstream_message"] = self.upstream_message
        return data


def _response_payload(response: Any) -> Any:
    """Read a response body as JSON, falling back to text, never raising."""
    try:
        return response.json()
    except Exception:
        pass
    try:
        return response.text or None
    except Exception:
        return None


def convert_topcoder_api_error(err: BaseException, message: str) -> UpstreamRequestError:
    """Wrap any transport or HTTP error into an UpstreamRequestError.

    Works on partial error shapes: errors without a response (network
    failures, timeouts), responses with non-JSON bodies and plain exceptions
    all produce a fully populated error whose message is ``message``.
    """
    response = getattr(err, "response", None)
    status_code = getattr(response, "status_code", None) if response is not None else None
    if not isinstance(status_code, int):
        status_code = None

    response_data = _response_payload(response) if response is not None else None

    upstream_message = None
    if isinstance(response_data, dict):
        upstream_message = get_path(response_data, "message") or get_path(
            response_data, "result.content.message"
        )
        if upstream_message is not None and not isinstance(upstream_message, str):
            upstream_message = str(upstream_message)

    return UpstreamRequestError(
        message,
        cause=err,
        status_code=status_code,
        response_data=response_data,
        upstream_message=upstream_message,
    )
