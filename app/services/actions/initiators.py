"""Who may open a rollback poll.

Each initiator carries the data it needs to check its own eligibility.
"""

from dataclasses import dataclass
from typing import ClassVar

from app.errors import AuthorityExhausted, EligibilityError
from app.models.common import RollbackInitiationType
from settings.governance import GovernanceConfig


@dataclass(frozen=True)
class FounderUnilateral:
    founder_id: str
    tokens_remaining: int
    authority_percentage: int

    initiation_type: ClassVar[str] = RollbackInitiationType.FOUNDER_UNILATERAL

    def validate(self, config: GovernanceConfig) -> None:
        if self.tokens_remaining <= 0:
            raise AuthorityExhausted(f"Founder rollback tokens exhausted ({config.founder_tokens} used)")
        if self.authority_percentage <= 0:
            raise AuthorityExhausted(
                f"Founder rollback authority ended after {config.founder_authority_years} years"
            )

    @property
    def initiated_by(self) -> str:
        return self.founder_id

    @property
    def signer_count(self) -> int | None:
        return None


@dataclass(frozen=True)
class VerifiedPetition:
    initiator_id: str
    signer_count: int

    initiation_type: ClassVar[str] = RollbackInitiationType.VERIFIED_USER_PETITION

    def validate(self, config: GovernanceConfig) -> None:
        if self.signer_count < config.petition_min_signers:
            raise EligibilityError(
                f"Petition requires at least {config.petition_min_signers} verified signers "
                f"(got {self.signer_count})"
            )

    @property
    def initiated_by(self) -> str:
        return self.initiator_id

    @property
    def authority_percentage(self) -> int | None:
        return None


@dataclass(frozen=True)
class AutomaticTrigger:
    reasons: tuple[str, ...]

    initiation_type: ClassVar[str] = RollbackInitiationType.AUTOMATIC_TRIGGER

    def validate(self, config: GovernanceConfig) -> None:
        if not self.reasons:
            raise EligibilityError("Automatic rollback needs at least one trigger")

    @property
    def initiated_by(self) -> None:
        return None

    @property
    def signer_count(self) -> int | None:
        return None

    @property
    def authority_percentage(self) -> int | None:
        return None


RollbackInitiator = FounderUnilateral | VerifiedPetition | AutomaticTrigger
