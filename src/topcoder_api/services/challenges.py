"""Challenge lifecycle service: create, update, activate, close, cancel."""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any

from topcoder_api.client import TopcoderClient
from topcoder_api.models.challenges import NewChallenge, Winner
from topcoder_api.utils.paths import get_path

logger = logging.getLogger(__name__)


class ChallengeService:
    """Service for Topcoder v5 challenges."""

    def __init__(self, client: TopcoderClient) -> None:
        self._client = client

    def build_challenge_body(self, challenge: NewChallenge) -> dict[str, Any]:
        """Overlay a new challenge onto the configured template."""
        defaults = self._client.config.challenge
        body = copy.deepcopy(defaults.new_challenge_template)
        body.setdefault("startDate", datetime.now(timezone.utc).isoformat())
        body.update({
            "typeId": defaults.type_id_first2finish,
            "name": challenge.name,
            "description": challenge.detailed_requirements,
            "prizeSets": [{
                "type": "Challenge prizes",
                "prizes": [{"type": "money", "value": prize} for prize in challenge.prizes],
            }],
            "timelineTemplateId": defaults.default_timeline_template_id,
            "projectId": challenge.project_id,
        })
        return body

    def create_challenge(self, challenge: NewChallenge) -> Any:
        """Create a challenge and return its id."""
        data = self._client.post(
            self._client.url("/challenges"),
            body=self.build_challenge_body(challenge),
            description="Failed to create challenge.",
        )
        return get_path(data, "id")

    def update_challenge(self, challenge_id: str, changes: dict[str, Any]) -> None:
        """Patch arbitrary fields of a challenge."""
        logger.debug(f"Updating challenge {challenge_id} with {changes}")
        self._patch(challenge_id, changes, "Failed to update challenge.")

    def activate_challenge(self, challenge_id: str) -> None:
        logger.debug(f"Activating challenge {challenge_id}")
        self._patch(challenge_id, {"status": "Active"}, "Failed to activate challenge.")
        logger.debug(f"Challenge {challenge_id} is activated successfully.")

    def close_challenge(self, challenge_id: str, winner_id: int, winner_handle: str) -> None:
        """Complete a challenge with a single first-place winner."""
        logger.debug(f"Closing challenge {challenge_id}")
        winner = Winner(user_id=winner_id, handle=winner_handle)
        body = {
            "status": "Completed",
            "winners": [winner.model_dump(by_alias=True)],
        }
        self._patch(challenge_id, body, "Failed to close challenge.")
        logger.debug(f"Challenge {challenge_id} is closed successfully.")

    def cancel_private_content(self, challenge_id: str) -> None:
        logger.debug(f"Cancelling challenge {challenge_id}")
        self._patch(challenge_id, {"status": "Canceled"}, "Failed to cancel challenge.")
        logger.debug(f"Challenge {challenge_id} is cancelled successfully.")

    def get_challenge_by_id(self, challenge_id: str) -> Any:
        """Fetch full challenge details."""
        return self._client.get(
            self._client.url("/challenges", challenge_id),
            description="Failed to get challenge details by Id",
        )

    def _patch(self, challenge_id: str, body: dict[str, Any], description: str) -> None:
        self._client.patch(
            self._client.url("/challenges", challenge_id),
            body=body,
            description=description,
        )
