"""Poll lifecycle - creation, activation, closing and statistics."""

import random
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

from loguru import logger

from app.errors import (
    InsufficientReputation,
    NotVerified,
    StateError,
    ValidationError,
)
from app.models import Action, Poll, PollResult
from app.models.common import IdentityMode, PollStatus, PollType, PoolStatus, TokenType, VoteOption
from app.models.staking import StakePool
from app.repositories import Database, PollRepository, StakePoolRepository, Transaction, VoteRepository
from app.services.collaborators import IdentityService, LedgerService, ReputationService
from app.services.parameters import ConstitutionalGuard, ParameterRegistry
from helpers import formulas, sections
from settings.governance import GovernanceConfig

# Poll types that carry a parameter change and pay the governance cost
GOVERNANCE_POLL_TYPES = (PollType.PARAMETER_VOTE, PollType.CONSTITUTIONAL)


class PollService:
    """Creates polls with their stake pool and settles them at close."""

    def __init__(
        self,
        poll_repo: PollRepository,
        vote_repo: VoteRepository,
        pool_repo: StakePoolRepository,
        registry: ParameterRegistry,
        guard: ConstitutionalGuard,
        ledger: LedgerService,
        reputation: ReputationService,
        identity: IdentityService,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
        rng: random.Random | None = None,
    ):
        self._polls = poll_repo
        self._votes = vote_repo
        self._pools = pool_repo
        self._registry = registry
        self._guard = guard
        self._ledger = ledger
        self._reputation = reputation
        self._identity = identity
        self._config = config
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        logger.debug("PollService initialized")

    # Creation

    def poll_cost(self, tx: Transaction, poll_type: str) -> int:
        if poll_type in GOVERNANCE_POLL_TYPES:
            return int(self._registry.numeric_value(tx, "poll_creation_cost_parameter", self._config.poll_cost_governance))
        return int(self._registry.numeric_value(tx, "poll_creation_cost_general", self._config.poll_cost_general))

    def approval_threshold(self, tx: Transaction, poll_type: str, parameter_name: str | None) -> float:
        if poll_type in (PollType.CONSTITUTIONAL, PollType.EMERGENCY_ROLLBACK):
            return self._config.supermajority_percentage
        if parameter_name and self._registry.requires_supermajority(tx, parameter_name):
            return self._config.supermajority_percentage
        return self._registry.numeric_value(tx, "poll_approval_percentage", self._config.approval_percentage)

    def create_poll(
        self,
        tx: Transaction,
        user_id: str,
        title: str,
        description: str,
        poll_type: str = PollType.GENERAL_COMMUNITY,
        parameter_name: str | None = None,
        proposed_value: str | None = None,
        duration_days: int | None = None,
        start_at: datetime | None = None,
        proposal_url: str | None = None,
        identity_mode: str = IdentityMode.TRUE_SELF,
    ) -> Poll:
        """Validate, charge the creator and persist a poll with its empty stake pool."""
        poll_type = self._parse(PollType, poll_type, "poll type")
        identity_mode = self._parse(IdentityMode, identity_mode, "identity mode")
        if not title.strip() or not description.strip():
            raise ValidationError("Title and description are required")
        if poll_type == PollType.EMERGENCY_ROLLBACK:
            raise ValidationError("Emergency rollback polls are created by the rollback protocol")
        if poll_type == PollType.PARAMETER_VOTE and not (parameter_name and proposed_value):
            raise ValidationError("Parameter name and proposed value required for parameter votes")
        if bool(parameter_name) != bool(proposed_value):
            raise ValidationError("Parameter name and proposed value must be given together")

        now = self._clock()
        if duration_days is not None:
            days = duration_days
        else:
            days = int(self._registry.numeric_value(tx, "poll_default_duration_days", self._config.default_duration_days))
        if days <= 0:
            raise ValidationError(f"Poll duration must be positive, got {days} days")
        if start_at is not None and start_at < now:
            raise ValidationError("Poll start cannot be in the past")

        # Eligibility
        if not self._identity.is_verified_human(tx, user_id):
            raise NotVerified(user_id)
        score = self._reputation.get_score(tx, user_id)
        if score < self._config.min_reputation_to_create_poll:
            raise InsufficientReputation(self._config.min_reputation_to_create_poll, score)

        # Constitution first, then the registry
        self._guard.enforce(parameter_name, proposed_value, description)
        current_value = None
        if parameter_name:
            self._registry.ensure_valid(tx, parameter_name, proposed_value)
            current_value = self._registry.get_parameter(tx, parameter_name).current_value

        start = start_at or now
        poll = Poll(
            id=str(uuid.uuid4()),
            title=title.strip(),
            description=description.strip(),
            poll_type=poll_type,
            status=PollStatus.ACTIVE if start <= now else PollStatus.PENDING,
            proposal_url=proposal_url,
            created_by=user_id,
            start_at=start,
            end_at=start + timedelta(days=days),
            section_multipliers=self._new_multipliers(),
            yes_count=0,
            no_count=0,
            abstain_count=0,
            yes_weight=0,
            no_weight=0,
            abstain_weight=0,
            minimum_quorum=int(self._registry.numeric_value(tx, "poll_minimum_vote_quorum", self._config.minimum_quorum)),
            approval_threshold=self.approval_threshold(tx, poll_type, parameter_name),
            parameter_name=parameter_name,
            parameter_current_value=current_value,
            parameter_proposed_value=proposed_value.strip() if proposed_value else None,
            action_id=None,
            rollback_target_action_id=None,
            creation_cost=self.poll_cost(tx, poll_type),
            final_yes_pct=None,
            final_no_pct=None,
            final_abstain_pct=None,
            quorum_met=None,
            closed_at=None,
            created_at=now,
            updated_at=now,
        )

        self._charge_creation(tx, user_id, identity_mode, poll)
        self._polls.insert(tx, poll)
        self._open_pool(tx, poll.id, now)

        logger.info(
            "Poll {} created by {}: type={}, cost={}, threshold={}%",
            poll.id,
            user_id,
            poll_type,
            poll.creation_cost,
            poll.approval_threshold,
        )
        return poll

    def create_emergency_poll(
        self,
        tx: Transaction,
        action: Action,
        initiated_by: str | None,
        reason: str,
    ) -> Poll:
        """Rollback poll for an executed action: reduced quorum, super-majority, short window, no cost."""
        now = self._clock()
        normal_quorum = int(self._registry.numeric_value(tx, "poll_minimum_vote_quorum", self._config.minimum_quorum))
        target = action.parameter_name or action.action_type
        poll = Poll(
            id=str(uuid.uuid4()),
            title=f"Emergency rollback: {target}",
            description=reason,
            poll_type=PollType.EMERGENCY_ROLLBACK,
            status=PollStatus.ACTIVE,
            proposal_url=None,
            created_by=initiated_by,
            start_at=now,
            end_at=now + timedelta(hours=self._config.rollback_voting_hours),
            section_multipliers=self._new_multipliers(),
            yes_count=0,
            no_count=0,
            abstain_count=0,
            yes_weight=0,
            no_weight=0,
            abstain_weight=0,
            minimum_quorum=formulas.rollback_quorum(normal_quorum, self._config.rollback_quorum_factor),
            approval_threshold=self._config.supermajority_percentage,
            parameter_name=action.parameter_name,
            parameter_current_value=action.new_value,
            parameter_proposed_value=action.old_value,
            action_id=None,
            rollback_target_action_id=action.id,
            creation_cost=0,
            final_yes_pct=None,
            final_no_pct=None,
            final_abstain_pct=None,
            quorum_met=None,
            closed_at=None,
            created_at=now,
            updated_at=now,
        )
        self._polls.insert(tx, poll)
        self._open_pool(tx, poll.id, now)
        logger.warning("Emergency rollback poll {} opened for action {}", poll.id, action.id)
        return poll

    def _new_multipliers(self) -> list[float]:
        return sections.generate_multipliers(
            self._rng,
            self._config.multiplier_min,
            self._config.multiplier_max,
            self._config.section_count,
        )

    def _charge_creation(self, tx: Transaction, user_id: str, identity_mode: str, poll: Poll) -> None:
        """Debit the full cost; 1% is burned and the rest feeds the rewards pool."""
        cost = poll.creation_cost
        if cost <= 0:
            return
        burn, pool = formulas.split_poll_cost(cost, self._config.burn_percent)
        self._ledger.debit(tx, user_id, identity_mode, TokenType.POLLCOIN, cost, f"Poll creation: {poll.title}", poll.id)
        if burn:
            self._ledger.burn(tx, TokenType.POLLCOIN, burn, "Poll creation burn", poll.id)
        self._ledger.credit_rewards_pool(tx, TokenType.POLLCOIN, pool, "Poll creation rewards pool", poll.id)
        logger.debug("Poll {} cost {}: burn={}, pool={}", poll.id, cost, burn, pool)

    def _open_pool(self, tx: Transaction, poll_id: str, now: datetime) -> None:
        self._pools.insert(
            tx,
            StakePool(
                poll_id=poll_id,
                status=PoolStatus.OPEN,
                total_yes_stake=0,
                total_no_stake=0,
                yes_staker_count=0,
                no_staker_count=0,
                average_yes_stake=0.0,
                average_no_stake=0.0,
                largest_stake=0,
                winning_option=None,
                total_distributed=0,
                platform_retained=0,
                closed_at=None,
                distributed_at=None,
                created_at=now,
            ),
        )

    @staticmethod
    def _parse(enum_cls, value: str, label: str):
        try:
            return enum_cls(value)
        except ValueError:
            raise ValidationError(f"Invalid {label}: {value}") from None

    # Queries

    def get_poll(self, tx: Transaction, poll_id: str) -> Poll:
        return self._polls.require(tx, poll_id)

    def list_polls(
        self,
        tx: Transaction,
        status: str | None = None,
        poll_type: str | None = None,
        created_by: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Poll]:
        return self._polls.list_polls(tx, status, poll_type, created_by, limit, offset)

    def get_statistics(self, tx: Transaction, poll_id: str) -> dict:
        """Live tallies, count and weighted percentages, quorum progress and time left."""
        poll = self._polls.require(tx, poll_id)
        yes_pct, no_pct, abstain_pct = formulas.outcome_percentages(poll.yes_count, poll.no_count, poll.abstain_count)
        weighted = formulas.outcome_percentages(poll.yes_weight, poll.no_weight, poll.abstain_weight)
        now = self._clock()
        remaining = max((poll.end_at - now).total_seconds(), 0) if poll.status == PollStatus.ACTIVE else 0
        return {
            "poll_id": poll.id,
            "status": poll.status,
            "total_votes": poll.total_votes,
            "total_weight": poll.total_weight,
            "unique_voters": self._votes.unique_voters(tx, poll_id),
            "yes_count": poll.yes_count,
            "no_count": poll.no_count,
            "abstain_count": poll.abstain_count,
            "yes_pct": yes_pct,
            "no_pct": no_pct,
            "abstain_pct": abstain_pct,
            "weighted_yes_pct": weighted[0],
            "weighted_no_pct": weighted[1],
            "weighted_abstain_pct": weighted[2],
            "minimum_quorum": poll.minimum_quorum,
            "quorum_progress_pct": round(min(poll.total_votes / poll.minimum_quorum * 100, 100), 2)
            if poll.minimum_quorum
            else 100.0,
            "approval_threshold": poll.approval_threshold,
            "average_multiplier": sections.average_multiplier(poll.section_multipliers),
            "seconds_remaining": int(remaining),
        }

    # Transitions

    def activate_due_polls(self, tx: Transaction) -> list[str]:
        """Move pending polls whose start time has come to active."""
        now = self._clock()
        ids = [p.id for p in self._polls.due_for_activation(tx, now)]
        for poll_id in ids:
            self._polls.update(tx, poll_id, status=PollStatus.ACTIVE, updated_at=now)
            logger.info("Poll {} activated", poll_id)
        return ids

    def close_poll(self, tx: Transaction, poll_id: str, force: bool = False) -> PollResult:
        """Finalize percentages, quorum and approval; closes the stake pool.

        Approval is decided on raw vote counts (one vote, one share); the
        weighted tallies are reported by ``get_statistics``.
        """
        poll = self._polls.require(tx, poll_id)
        now = self._clock()
        if poll.status != PollStatus.ACTIVE:
            raise StateError(f"Poll {poll_id} is {poll.status}, only active polls can be closed")
        if now < poll.end_at and not force:
            raise StateError(f"Poll {poll_id} is still open until {poll.end_at}")

        yes_pct, no_pct, abstain_pct = formulas.outcome_percentages(poll.yes_count, poll.no_count, poll.abstain_count)
        quorum_met = poll.total_votes >= poll.minimum_quorum
        approved = formulas.is_approved(quorum_met, yes_pct, poll.approval_threshold)
        status = PollStatus.APPROVED if approved else PollStatus.REJECTED

        self._polls.update(
            tx,
            poll_id,
            status=status,
            final_yes_pct=yes_pct,
            final_no_pct=no_pct,
            final_abstain_pct=abstain_pct,
            quorum_met=quorum_met,
            closed_at=now,
            updated_at=now,
        )
        pool = self._pools.get(tx, poll_id)
        if pool and pool.status == PoolStatus.OPEN:
            self._pools.update(tx, poll_id, status=PoolStatus.CLOSED, closed_at=now)

        if approved:
            winning = VoteOption.YES
        elif quorum_met:
            winning = VoteOption.NO
        else:
            winning = VoteOption.ABSTAIN

        logger.info(
            "Poll {} closed: {} (yes={}%, votes={}/{}, threshold={}%)",
            poll_id,
            status,
            yes_pct,
            poll.total_votes,
            poll.minimum_quorum,
            poll.approval_threshold,
        )
        return PollResult(
            poll_id=poll_id,
            status=status,
            yes_pct=yes_pct,
            no_pct=no_pct,
            abstain_pct=abstain_pct,
            total_votes=poll.total_votes,
            total_unique_voters=self._votes.unique_voters(tx, poll_id),
            quorum_met=quorum_met,
            approval_threshold=poll.approval_threshold,
            winning_option=winning,
        )

    def link_action(self, tx: Transaction, poll_id: str, action_id: str) -> None:
        self._polls.update(tx, poll_id, action_id=action_id, updated_at=self._clock())

    def mark_executed(self, tx: Transaction, poll_id: str, action_id: str | None = None) -> None:
        changes = {"status": PollStatus.EXECUTED, "updated_at": self._clock()}
        if action_id:
            changes["action_id"] = action_id
        self._polls.update(tx, poll_id, **changes)

    def mark_rolled_back(self, tx: Transaction, poll_id: str) -> None:
        self._polls.update(tx, poll_id, status=PollStatus.ROLLED_BACK, updated_at=self._clock())

    def close_expired_polls(self, db: Database) -> list[PollResult]:
        """Sweep: close every active poll past its end, one transaction each."""
        with db.transaction() as tx:
            ids = [p.id for p in self._polls.expired_active(tx, self._clock())]

        results = []
        for poll_id in ids:
            with db.transaction() as tx:
                results.append(self.close_poll(tx, poll_id))
        logger.info("Closed {} expired polls", len(results))
        return results
