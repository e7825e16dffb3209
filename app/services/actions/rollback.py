"""Emergency rollback protocol.

Three initiation paths (founder token, verified petition, automatic trigger)
all open the same kind of emergency poll. Only an approved rollback poll
reverts anything.
"""

import uuid
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import EligibilityError, RollbackWindowExpired, StateError, ValidationError
from app.models import Action, FounderAuthority, Poll, RollbackRequest, RollbackStatus
from app.models.common import ActionStatus, PollStatus, PollType
from app.repositories import ActionRepository, PollRepository, RollbackRequestRepository, Transaction
from app.services.actions.initiators import AutomaticTrigger, FounderUnilateral, RollbackInitiator, VerifiedPetition
from app.services.collaborators import IdentityService, PlatformMetrics, ReputationService
from app.services.parameters import ParameterRegistry
from app.services.polls import PollService
from helpers import formulas
from settings.governance import GovernanceConfig


class RollbackService:
    def __init__(
        self,
        action_repo: ActionRepository,
        request_repo: RollbackRequestRepository,
        poll_repo: PollRepository,
        polls: PollService,
        registry: ParameterRegistry,
        reputation: ReputationService,
        identity: IdentityService,
        metrics: PlatformMetrics,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
    ):
        self._actions = action_repo
        self._requests = request_repo
        self._poll_repo = poll_repo
        self._polls = polls
        self._registry = registry
        self._reputation = reputation
        self._identity = identity
        self._metrics = metrics
        self._config = config
        self._clock = clock
        logger.debug("RollbackService initialized")

    # Founder

    def launch_at(self, tx: Transaction) -> datetime:
        """Configured launch time, else the first poll ever created."""
        return self._config.platform_launch_at or self._poll_repo.first_created_at(tx) or self._clock()

    def founder_authority(self, tx: Transaction) -> FounderAuthority:
        years = formulas.years_between(self.launch_at(tx), self._clock())
        percentage = formulas.founder_authority_percentage(years, self._config.founder_authority_years)
        used = self._requests.founder_uses(tx)
        remaining = max(self._config.founder_tokens - used, 0)
        return FounderAuthority(
            founder_user_id=self._config.founder_user_id,
            tokens_total=self._config.founder_tokens,
            tokens_used=used,
            tokens_remaining=remaining,
            years_since_launch=round(years, 2),
            authority_percentage=percentage,
            can_rollback=remaining > 0 and percentage > 0,
        )

    def initiate_founder_rollback(self, tx: Transaction, user_id: str, action_id: str, reason: str) -> Poll:
        """Spend one founder token to open a rollback poll."""
        if not self._config.founder_user_id or user_id != self._config.founder_user_id:
            raise EligibilityError("Only the founder can initiate a unilateral rollback")
        authority = self.founder_authority(tx)
        initiator = FounderUnilateral(
            founder_id=user_id,
            tokens_remaining=authority.tokens_remaining,
            authority_percentage=authority.authority_percentage,
        )
        poll = self._open_rollback(tx, action_id, initiator, reason)
        logger.warning(
            "Founder rollback on action {}: {} tokens left, authority {}%",
            action_id,
            authority.tokens_remaining - 1,
            authority.authority_percentage,
        )
        return poll

    # Petition

    def petition_rollback(
        self,
        tx: Transaction,
        initiator_id: str,
        action_id: str,
        signer_ids: list[str],
        reason: str,
    ) -> Poll:
        """Open a rollback poll backed by enough verified, reputable signers."""
        if not self._identity.is_verified_human(tx, initiator_id):
            raise EligibilityError(f"Petition initiator {initiator_id} is not a verified human")

        qualified = [
            signer
            for signer in dict.fromkeys(signer_ids)
            if self._identity.is_verified_human(tx, signer)
            and self._reputation.get_score(tx, signer) >= self._config.petition_min_score
        ]
        if len(qualified) < len(set(signer_ids)):
            logger.debug("Petition on action {}: {} of {} signers qualify", action_id, len(qualified), len(set(signer_ids)))

        initiator = VerifiedPetition(initiator_id=initiator_id, signer_count=len(qualified))
        return self._open_rollback(tx, action_id, initiator, reason)

    # Automatic

    def check_automatic_triggers(self, tx: Transaction, action_id: str) -> list[str]:
        """Heuristics that warrant a rollback poll without a human initiator."""
        action = self._actions.require(tx, action_id)
        if action.executed_at is None:
            return []

        triggers = []
        total = self._metrics.total_users(tx)
        deleted = self._metrics.deleted_since(tx, action.executed_at)
        rate = formulas.exodus_rate(deleted, total)
        if rate > self._config.exodus_threshold:
            triggers.append(f"User exodus detected: {round(rate * 100)}% of users deleted accounts")
        return triggers

    def initiate_automatic_rollback(
        self, tx: Transaction, action_id: str, triggers: list[str] | None = None
    ) -> Poll | None:
        """Open a rollback poll when any trigger fires; pass ``triggers`` to reuse an earlier check."""
        if triggers is None:
            triggers = self.check_automatic_triggers(tx, action_id)
        if not triggers:
            return None
        reason = "Automatic rollback triggered:\n" + "\n".join(f"- {t}" for t in triggers)
        return self._open_rollback(tx, action_id, AutomaticTrigger(reasons=tuple(triggers)), reason)

    # Common path

    def _eligible_action(self, tx: Transaction, action_id: str) -> Action:
        action = self._actions.require(tx, action_id)
        if action.status != ActionStatus.COMPLETED:
            raise StateError(f"Cannot rollback action with status: {action.status}")
        if self._clock() > action.rollback_window_expires_at:
            raise RollbackWindowExpired(action_id, action.rollback_window_expires_at)
        open_poll = self._poll_repo.open_rollback_poll(tx, action_id)
        if open_poll is not None:
            raise StateError(f"Rollback poll {open_poll.id} is already open for action {action_id}")
        return action

    def _open_rollback(self, tx: Transaction, action_id: str, initiator: RollbackInitiator, reason: str) -> Poll:
        if not reason or not reason.strip():
            raise ValidationError("A rollback reason is required")
        initiator.validate(self._config)
        action = self._eligible_action(tx, action_id)

        poll = self._polls.create_emergency_poll(tx, action, initiator.initiated_by, reason.strip())
        now = self._clock()
        self._requests.insert(
            tx,
            RollbackRequest(
                id=str(uuid.uuid4()),
                action_id=action_id,
                initiation_type=initiator.initiation_type,
                initiated_by=initiator.initiated_by,
                signer_count=initiator.signer_count,
                authority_percentage=initiator.authority_percentage,
                reasons=reason.strip(),
                rollback_poll_id=poll.id,
                created_at=now,
            ),
        )
        self._actions.update(
            tx,
            action_id,
            rollback_initiation_type=initiator.initiation_type,
            rollback_initiated_by=initiator.initiated_by,
            rollback_poll_id=poll.id,
            updated_at=now,
        )
        logger.warning("Rollback poll {} opened for action {} ({})", poll.id, action_id, initiator.initiation_type)
        return poll

    # Execution

    def execute_rollback(self, tx: Transaction, rollback_poll_id: str) -> Action:
        """Apply an approved rollback poll: restore the old value and retire the action."""
        poll = self._polls.get_poll(tx, rollback_poll_id)
        if poll.poll_type != PollType.EMERGENCY_ROLLBACK:
            raise ValidationError(f"Poll {rollback_poll_id} is not a rollback poll")
        if poll.status != PollStatus.APPROVED:
            raise StateError(f"Cannot execute rollback poll with status: {poll.status}")
        if not poll.rollback_target_action_id:
            raise StateError(f"Rollback poll {rollback_poll_id} has no linked action")

        action = self._actions.require(tx, poll.rollback_target_action_id)
        if action.status != ActionStatus.COMPLETED:
            raise StateError(f"Cannot rollback action with status: {action.status}")

        if action.parameter_name and action.old_value is not None:
            param = self._registry.record_rollback(tx, action.parameter_name, action.old_value)
            if param.frozen_until is not None:
                logger.warning("Parameter {} frozen after {} rollbacks", param.name, param.rollback_count)

        now = self._clock()
        self._actions.update(tx, action.id, status=ActionStatus.ROLLED_BACK, rolled_back_at=now, updated_at=now)
        self._polls.mark_rolled_back(tx, action.poll_id)
        self._polls.mark_executed(tx, rollback_poll_id)
        logger.warning("Action {} rolled back via poll {}", action.id, rollback_poll_id)
        return self._actions.require(tx, action.id)

    # Status

    def rollback_status(self, tx: Transaction, action_id: str) -> RollbackStatus:
        action = self._actions.require(tx, action_id)
        now = self._clock()
        expires = action.rollback_window_expires_at
        open_poll = self._poll_repo.open_rollback_poll(tx, action_id)

        reason = None
        if action.status != ActionStatus.COMPLETED:
            reason = f"Action status is {action.status}"
        elif now > expires:
            reason = "Rollback window expired"
        elif open_poll is not None:
            reason = "Rollback poll already open"

        rollback_count, frozen = 0, False
        if action.parameter_name:
            param = self._registry.get_parameter(tx, action.parameter_name)
            rollback_count, frozen = param.rollback_count, param.is_frozen(now)

        return RollbackStatus(
            action_id=action_id,
            action_status=action.status,
            can_rollback=reason is None,
            reason=reason,
            window_expires_at=expires,
            hours_remaining=round(max((expires - now).total_seconds(), 0) / 3600, 2) if expires else 0.0,
            rollback_count=rollback_count,
            parameter_frozen=frozen,
            open_rollback_poll_id=open_poll.id if open_poll else None,
        )

    def requests_for_action(self, tx: Transaction, action_id: str) -> list[RollbackRequest]:
        return self._requests.for_action(tx, action_id)
