"""Challenge resource (role assignment) service."""

from __future__ import annotations

import logging
from typing import Any

from topcoder_api.client import TopcoderClient
from topcoder_api.models.challenges import Resource

logger = logging.getLogger(__name__)


class ResourceService:
    """Service for adding, listing and removing challenge resources."""

    def __init__(self, client: TopcoderClient) -> None:
        self._client = client

    def add_resource_to_challenge(self, challenge_id: str, handle: str, role_id: str) -> None:
        logger.debug(f"adding resource to challenge {challenge_id}")
        self._client.post(
            self._client.url("/resources"),
            body=self._resource_body(challenge_id, handle, role_id),
            description="Failed to add resource to the challenge.",
        )

    def get_resources_from_challenge(self, challenge_id: str) -> list[dict[str, Any]]:
        logger.debug(f"fetch resource from challenge {challenge_id}")
        data = self._client.get(
            self._client.url("/resources"),
            params={"challengeId": challenge_id},
            description="Failed to fetch resource from the challenge.",
        )
        return data or []

    def remove_resource_to_challenge(self, challenge_id: str, handle: str, role_id: str) -> None:
        logger.debug(f"removing resource from challenge {challenge_id}")
        self._client.delete(
            self._client.url("/resources"),
            body=self._resource_body(challenge_id, handle, role_id),
            description="Failed to remove resource from the challenge.",
        )

    def role_already_set(self, challenge_id: str, role_id: str) -> bool:
        """Check whether any resource on the challenge holds ``role_id``."""
        resources = self.get_resources_from_challenge(challenge_id)
        return any(
            isinstance(resource, dict) and resource.get("roleId") == role_id
            for resource in resources
        )

    def unregister_user_from_challenge(self, challenge_id: str, handle: str, role_id: str) -> None:
        self.remove_resource_to_challenge(challenge_id, handle, role_id)

    def assign_user_as_registrant(self, handle: str, challenge_id: str) -> None:
        """Register ``handle`` on the challenge with the submitter role."""
        role_id = self._client.config.challenge.role_id_submitter
        self.add_resource_to_challenge(challenge_id, handle, role_id)

    @staticmethod
    def _resource_body(challenge_id: str, handle: str, role_id: str) -> dict[str, Any]:
        resource = Resource(challenge_id=challenge_id, member_handle=handle, role_id=role_id)
        return resource.model_dump(by_alias=True)
