"""Outbound request descriptor."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RequestDescriptor(BaseModel):
    """A single outbound call: verb, target URL, query params, optional JSON body and headers."""
    method: str
    url: str
    body: Any = None
    params: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def endpoint(self) -> str:
        """Short form used in trace records, e.g. ``PATCH /challenges/123``."""
        return f"{self.method} {self.url}"
