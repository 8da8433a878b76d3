"""Member lookup service."""

from __future__ import annotations

from typing import Any

from topcoder_api.client import TopcoderClient
from topcoder_api.utils.paths import get_path


class MemberService:
    """Service for Topcoder member profiles (v3 API, no auth)."""

    def __init__(self, client: TopcoderClient) -> None:
        self._client = client

    def get_topcoder_member_id(self, handle: str) -> Any:
        """Return the numeric user id for a member handle."""
        data = self._client.get(
            self._client.url("/members", handle, v3=True),
            authenticate=False,
            description="Failed to get topcoder member id.",
        )
        return get_path(data, "result.content.userId")
