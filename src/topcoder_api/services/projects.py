"""Project management service."""

from __future__ import annotations

import logging
from typing import Any

from topcoder_api.client import TopcoderClient
from topcoder_api.utils.paths import get_path

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for Topcoder connect projects."""

    def __init__(self, client: TopcoderClient) -> None:
        self._client = client

    def create_project(self, name: str) -> Any:
        """Create a new project and return its id."""
        data = self._client.post(
            self._client.url("/projects"),
            body={"name": name},
            description="Failed to create project.",
        )
        return get_path(data, "id")

    def get_project_billing_account_id(self, project_id: int | str) -> Any:
        """Return the project's billing account id, or None when it has none."""
        logger.debug(f"Getting project billing detail {project_id}")
        data = self._client.get(
            self._client.url("/projects", project_id),
            description="Failed to get billing detail for the project.",
        )
        billing_account_id = get_path(data, "billingAccountId")
        if billing_account_id is None:
            logger.debug(f"There is no billing account id associated with project {project_id}")
        return billing_account_id
