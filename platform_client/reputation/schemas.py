"""Reputation API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ScoreSchema(BaseModel):
    """Trust score of a user, 0-100; absent when never computed."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    score: float | None = Field(default=None, ge=0, le=100)
