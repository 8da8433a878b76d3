"""Challenge, winner and resource data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NewChallenge(BaseModel):
    name: str
    detailed_requirements: str = Field(default="", alias="detailedRequirements")
    prizes: list[int | float] = Field(default_factory=list)
    project_id: int = Field(alias="projectId")

    model_config = {"populate_by_name": True}


class Winner(BaseModel):
    user_id: int = Field(alias="userId")
    handle: str
    placement: int = 1

    model_config = {"populate_by_name": True}


class Resource(BaseModel):
    """A role assignment of a member against a challenge."""
    challenge_id: str | int = Field(alias="challengeId")
    member_handle: str = Field(alias="memberHandle")
    role_id: str = Field(alias="roleId")

    model_config = {"populate_by_name": True, "extra": "allow"}
