"""Structured error output for the CLI."""

from __future__ import annotations

import json
import sys

from rich.console import Console

from topcoder_api.exceptions import (
    AuthenticationError,
    AuthorizationError,
    MachineTokenError,
    TopcoderError,
    UpstreamRequestError,
)

console = Console(stderr=True)

# Actionable hints keyed by HTTP status
_STATUS_HINTS: dict[int, str] = {
    400: "The API rejected the payload: check ids and field values",
    401: "Token rejected: check AUTH0_CLIENT_ID / AUTH0_CLIENT_SECRET",
    403: "The M2M client lacks the scope for this endpoint",
    404: "The entity does not exist: verify the id or handle",
    409: "Conflict: the resource or role may already be set",
}


def _get_hint(error: Exception) -> str | None:
    """Match an error to an actionable hint."""
    if isinstance(error, (AuthenticationError, AuthorizationError)):
        return "Check TOPCODER_USERNAME / TOPCODER_PASSWORD and the v2/v3 auth URLs"
    if isinstance(error, MachineTokenError):
        return "Check AUTH0_URL, AUTH0_AUDIENCE and the M2M client credentials"
    if isinstance(error, UpstreamRequestError):
        if error.status_code is None:
            return "No response from the API: check network connectivity and TOPCODER_API_URL"
        if error.status_code >= 500:
            return "Topcoder API server error: retry later"
        return _STATUS_HINTS.get(error.status_code)
    return None


def _error_code(error: Exception) -> str:
    if isinstance(error, (AuthenticationError, AuthorizationError)):
        return "AUTH_ERROR"
    if isinstance(error, MachineTokenError):
        return "M2M_TOKEN_ERROR"
    if isinstance(error, UpstreamRequestError):
        if error.status_code is None:
            return "CONNECTION_ERROR"
        if error.status_code == 404:
            return "NOT_FOUND"
        return "UPSTREAM_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Print a JSON error object to stdout and a readable line to stderr.

    {"error": true, "code": "NOT_FOUND", "kind": "upstream-request-failure",
     "message": "...", "status_code": 404, "hint": "..."}
    """
    error_obj: dict[str, object] = {"error": True, "code": _error_code(error)}
    if isinstance(error, TopcoderError):
        error_obj.update(error.to_dict())
    else:
        error_obj["message"] = str(error)

    hint = _get_hint(error)
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {error_obj['message']}")
    upstream = getattr(error, "upstream_message", None)
    if upstream:
        console.print(f"[dim]Upstream: {upstream}[/dim]")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
