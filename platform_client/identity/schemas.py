"""Identity API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class VerificationSchema(BaseModel):
    """Proof-of-humanity status."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    is_verified_human: bool = Field(alias="isVerifiedHuman", default=False)
    poh_score: float | None = Field(alias="pohScore", default=None)
