"""Vote delegation - an identity hands its vote to a verified delegate."""

import uuid
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import EligibilityError, NotVerified, StateError, ValidationError
from app.models import Delegation, Poll
from app.models.common import DelegationType, IdentityMode, PollType
from app.repositories import DelegationRepository, PollRepository, Transaction
from app.services.collaborators import IdentityService


def covers(delegation: Delegation, poll: Poll) -> bool:
    """Whether a delegation applies to the given poll."""
    if delegation.delegation_type == DelegationType.ALL_GOVERNANCE:
        return True
    if delegation.delegation_type == DelegationType.PARAMETER_VOTES_ONLY:
        return poll.poll_type == PollType.PARAMETER_VOTE
    return delegation.target_poll_id == poll.id


class DelegationService:
    """Creates and revokes delegations; no chains, one active per identity."""

    def __init__(
        self,
        delegation_repo: DelegationRepository,
        poll_repo: PollRepository,
        identity: IdentityService,
        clock: Callable[[], datetime],
    ):
        self._delegations = delegation_repo
        self._polls = poll_repo
        self._identity = identity
        self._clock = clock
        logger.debug("DelegationService initialized")

    def create_delegation(
        self,
        tx: Transaction,
        user_id: str,
        identity_mode: str,
        delegate_id: str,
        delegation_type: str = DelegationType.ALL_GOVERNANCE,
        target_poll_id: str | None = None,
        active_until: datetime | None = None,
    ) -> Delegation:
        try:
            identity_mode = IdentityMode(identity_mode)
            delegation_type = DelegationType(delegation_type)
        except ValueError as exc:
            raise ValidationError(str(exc)) from None

        now = self._clock()
        if delegate_id == user_id:
            raise ValidationError("Cannot delegate to yourself")
        if delegation_type == DelegationType.SPECIFIC_POLL:
            if not target_poll_id:
                raise ValidationError("A specific-poll delegation needs a target poll")
            self._polls.require(tx, target_poll_id)
        if active_until is not None and active_until <= now:
            raise ValidationError("Delegation end must be in the future")

        if not self._identity.is_verified_human(tx, delegate_id):
            raise NotVerified(delegate_id)
        if self._delegations.active_by_delegator(tx, delegate_id, now):
            raise EligibilityError("Delegate has delegated their own vote; delegation chains are not allowed")
        if self._delegations.active_to_delegate(tx, user_id, now):
            raise EligibilityError("You hold delegated votes; delegation chains are not allowed")
        if self._delegations.active_for(tx, user_id, identity_mode, now):
            raise EligibilityError(f"An active delegation already exists for {identity_mode}")

        other = IdentityMode.SHADOW if identity_mode == IdentityMode.TRUE_SELF else IdentityMode.TRUE_SELF
        if any(d.delegate_id == delegate_id for d in self._delegations.active_for(tx, user_id, other, now)):
            logger.warning("Both identities of a user delegated to the same delegate - privacy risk")

        delegation = Delegation(
            id=str(uuid.uuid4()),
            delegator_id=user_id,
            identity_mode=identity_mode,
            delegate_id=delegate_id,
            delegation_type=delegation_type,
            target_poll_id=target_poll_id,
            active_from=now,
            active_until=active_until,
            revoked_at=None,
            created_at=now,
        )
        self._delegations.insert(tx, delegation)
        logger.info("Delegation {} created ({}, {})", delegation.id, identity_mode, delegation_type)
        return delegation

    def revoke_delegation(self, tx: Transaction, user_id: str, delegation_id: str) -> Delegation:
        delegation = self._delegations.require(tx, delegation_id)
        if delegation.delegator_id != user_id:
            raise EligibilityError("Only the delegator can revoke a delegation")
        if delegation.revoked_at is not None:
            raise StateError(f"Delegation {delegation_id} is already revoked")
        self._delegations.update(tx, delegation_id, revoked_at=self._clock())
        logger.info("Delegation {} revoked", delegation_id)
        return self._delegations.require(tx, delegation_id)

    def list_delegations(self, tx: Transaction, user_id: str) -> list[Delegation]:
        return self._delegations.for_user(tx, user_id)

    def find_active(self, tx: Transaction, user_id: str, identity_mode: str, poll: Poll) -> Delegation | None:
        """The delegation that would route this identity's vote on the poll."""
        for delegation in self._delegations.active_for(tx, user_id, identity_mode, self._clock()):
            if covers(delegation, poll):
                return delegation
        return None

    def delegated_to(self, tx: Transaction, delegate_id: str, poll: Poll) -> list[Delegation]:
        """Active delegations a delegate may vote on for the poll."""
        return [d for d in self._delegations.active_to_delegate(tx, delegate_id, self._clock()) if covers(d, poll)]
