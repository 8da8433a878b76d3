"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel


class CachedToken(BaseModel):
    """A legacy access token together with its decoded timestamps."""
    token: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None


class MachineToken(BaseModel):
    """Response from the Auth0 client-credentials endpoint."""
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 86400


class TokenStatus(BaseModel):
    """Current state of the cached legacy access token."""
    has_token: bool
    is_valid: bool
    issued_at: datetime | None = None
    expires_at: datetime | None = None
