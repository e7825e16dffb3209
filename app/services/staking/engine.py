"""Stake pool engine - Gratium prediction market on each poll's outcome.

Winners split the whole pool in proportion to their stake, rounded down.
The rounding remainder stays with the platform and is recorded on the pool.
"""

import uuid
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import DuplicateStake, InsufficientBalance, NotVerified, StateError, ValidationError
from app.models import Distribution, Stake, StakePool
from app.models.common import IdentityMode, PollStatus, PoolStatus, StakeStatus, TokenType, VoteOption
from app.repositories import PollRepository, StakePoolRepository, StakeRepository, Transaction
from app.services.collaborators import IdentityService, LedgerService, ReputationService
from app.services.parameters import ParameterRegistry
from helpers import formulas
from settings.governance import GovernanceConfig

STAKEABLE_POLL_STATUSES = (PollStatus.PENDING, PollStatus.ACTIVE)
SETTLED_POOL_STATUSES = (PoolStatus.DISTRIBUTED, PoolStatus.REFUNDED)


class StakePoolEngine:
    """Accepts stakes and settles pools."""

    def __init__(
        self,
        pool_repo: StakePoolRepository,
        stake_repo: StakeRepository,
        poll_repo: PollRepository,
        registry: ParameterRegistry,
        ledger: LedgerService,
        reputation: ReputationService,
        identity: IdentityService,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
    ):
        self._pools = pool_repo
        self._stakes = stake_repo
        self._polls = poll_repo
        self._registry = registry
        self._ledger = ledger
        self._reputation = reputation
        self._identity = identity
        self._config = config
        self._clock = clock
        logger.debug("StakePoolEngine initialized")

    def minimum_stake(self, tx: Transaction) -> int:
        return int(self._registry.numeric_value(tx, "minimum_gratium_stake", self._config.minimum_stake))

    @staticmethod
    def _position(position: str) -> VoteOption:
        try:
            option = VoteOption(position)
        except ValueError:
            raise ValidationError(f"Invalid stake position: {position}") from None
        if option == VoteOption.ABSTAIN:
            raise ValidationError("Cannot stake on abstain")
        return option

    def create_stake(
        self,
        tx: Transaction,
        user_id: str,
        poll_id: str,
        identity_mode: str,
        position: str,
        amount: int,
        reasoning: str | None = None,
    ) -> Stake:
        """Lock Gratium on a yes/no outcome; one stake per identity per poll."""
        position = self._position(position)
        try:
            identity_mode = IdentityMode(identity_mode)
        except ValueError:
            raise ValidationError(f"Invalid identity mode: {identity_mode}") from None
        minimum = self.minimum_stake(tx)
        if amount < minimum:
            raise ValidationError(f"Minimum stake is {minimum} Gratium")

        poll = self._polls.require(tx, poll_id)
        now = self._clock()
        if poll.status not in STAKEABLE_POLL_STATUSES or now > poll.end_at:
            raise StateError(f"Poll {poll_id} is not accepting stakes (status: {poll.status})")
        pool = self._pools.require(tx, poll_id)
        if pool.status != PoolStatus.OPEN:
            raise StateError(f"Stake pool for poll {poll_id} is {pool.status}")
        if not self._identity.is_verified_human(tx, user_id):
            raise NotVerified(user_id)
        if self._stakes.find(tx, poll_id, user_id, identity_mode) is not None:
            raise DuplicateStake(f"Already staked on poll {poll_id} as {identity_mode}")
        if not self._ledger.check_balance(tx, user_id, identity_mode, TokenType.GRATIUM, amount):
            available = self._ledger.available(tx, user_id, identity_mode, TokenType.GRATIUM)
            raise InsufficientBalance(TokenType.GRATIUM, amount, available)

        stake = Stake(
            id=str(uuid.uuid4()),
            poll_id=poll_id,
            user_id=user_id,
            identity_mode=identity_mode,
            position=position,
            amount=amount,
            confidence_level=formulas.confidence_level(amount),
            reasoning=reasoning,
            reputation_at_stake=self._reputation.get_score(tx, user_id),
            status=StakeStatus.ACTIVE,
            reward=None,
            created_at=now,
            resolved_at=None,
        )
        self._stakes.insert(tx, stake)
        self._ledger.lock(tx, user_id, identity_mode, TokenType.GRATIUM, amount, stake.id)
        self._pools.refresh_totals(tx, poll_id)
        logger.info("Stake {} on poll {}: {} Gratium on {} ({})", stake.id, poll_id, amount, position, stake.confidence_level)
        return stake

    def distribute_stake_rewards(self, tx: Transaction, poll_id: str, winning_option: str) -> Distribution:
        """Settle a closed pool: proportional payout, or refund everyone on abstain or a one-sided pool."""
        try:
            winning_option = VoteOption(winning_option)
        except ValueError:
            raise ValidationError(f"Invalid winning option: {winning_option}") from None
        pool = self._pools.require(tx, poll_id)
        if pool.status in SETTLED_POOL_STATUSES:
            raise StateError(f"Stake pool for poll {poll_id} is already {pool.status}")
        if pool.status != PoolStatus.CLOSED:
            raise StateError(f"Stake pool for poll {poll_id} is still open")

        stakes = self._stakes.for_poll(tx, poll_id, StakeStatus.ACTIVE)
        if winning_option == VoteOption.ABSTAIN or pool.total_yes_stake == 0 or pool.total_no_stake == 0:
            return self._refund_all(tx, pool, stakes, winning_option)

        now = self._clock()
        winners = [s for s in stakes if s.position == winning_option]
        losers = [s for s in stakes if s.position != winning_option]
        rewards, retained = formulas.distribute([s.amount for s in winners], pool.total_pool)

        for stake, reward in zip(winners, rewards):
            self._ledger.unlock(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, stake.amount, stake.id)
            self._ledger.debit(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, stake.amount, "Stake settled", stake.id)
            self._ledger.credit_as_reward(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, reward, stake.id)
            self._stakes.update(tx, stake.id, status=StakeStatus.WON, reward=reward, resolved_at=now)

        for stake in losers:
            self._ledger.unlock(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, stake.amount, stake.id)
            self._ledger.debit(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, stake.amount, "Stake forfeited", stake.id)
            self._stakes.update(tx, stake.id, status=StakeStatus.LOST, reward=0, resolved_at=now)

        if retained:
            self._ledger.credit_rewards_pool(tx, TokenType.GRATIUM, retained, "Stake rounding remainder", poll_id)

        distributed = sum(rewards)
        self._pools.update(
            tx,
            poll_id,
            status=PoolStatus.DISTRIBUTED,
            winning_option=winning_option,
            total_distributed=distributed,
            platform_retained=retained,
            distributed_at=now,
        )
        logger.info(
            "Stake pool {} distributed: {} to {} winners, {} losers, {} retained",
            poll_id,
            distributed,
            len(winners),
            len(losers),
            retained,
        )
        return Distribution(
            poll_id=poll_id,
            pool_status=PoolStatus.DISTRIBUTED,
            winning_option=winning_option,
            total_pool=pool.total_pool,
            total_distributed=distributed,
            platform_retained=retained,
            winners=len(winners),
            losers=len(losers),
            refunded=0,
        )

    def _refund_all(self, tx: Transaction, pool: StakePool, stakes: list[Stake], winning_option: VoteOption) -> Distribution:
        now = self._clock()
        for stake in stakes:
            self._ledger.unlock(tx, stake.user_id, stake.identity_mode, TokenType.GRATIUM, stake.amount, stake.id)
            self._stakes.update(tx, stake.id, status=StakeStatus.REFUNDED, reward=stake.amount, resolved_at=now)

        refunded = sum(s.amount for s in stakes)
        self._pools.update(
            tx,
            pool.poll_id,
            status=PoolStatus.REFUNDED,
            winning_option=winning_option,
            total_distributed=refunded,
            platform_retained=0,
            distributed_at=now,
        )
        logger.info("Stake pool {} refunded: {} stakes, {} Gratium", pool.poll_id, len(stakes), refunded)
        return Distribution(
            poll_id=pool.poll_id,
            pool_status=PoolStatus.REFUNDED,
            winning_option=winning_option,
            total_pool=pool.total_pool,
            total_distributed=refunded,
            platform_retained=0,
            winners=0,
            losers=0,
            refunded=len(stakes),
        )

    def resolve_from_poll(self, tx: Transaction, poll_id: str) -> Distribution:
        """Settle using the closed poll's outcome."""
        poll = self._polls.require(tx, poll_id)
        if poll.status in (PollStatus.APPROVED, PollStatus.EXECUTED, PollStatus.ROLLED_BACK):
            winning = VoteOption.YES
        elif poll.status == PollStatus.REJECTED:
            winning = VoteOption.NO if poll.quorum_met else VoteOption.ABSTAIN
        else:
            raise StateError(f"Poll {poll_id} has no outcome yet (status: {poll.status})")
        return self.distribute_stake_rewards(tx, poll_id, winning)

    def calculate_potential_reward(self, tx: Transaction, poll_id: str, position: str, amount: int) -> dict:
        """Payout preview as if the stake were already in the pool."""
        position = self._position(position)
        if amount <= 0:
            raise ValidationError("Stake amount must be positive")
        pool = self._pools.require(tx, poll_id)
        preview = formulas.potential_reward(amount, pool.side_total(position), pool.total_pool)
        return {"poll_id": poll_id, "position": position, "amount": amount, **preview}

    # Queries

    def get_pool(self, tx: Transaction, poll_id: str) -> StakePool:
        return self._pools.require(tx, poll_id)

    def get_poll_stakes(self, tx: Transaction, poll_id: str) -> list[Stake]:
        self._pools.require(tx, poll_id)
        return self._stakes.for_poll(tx, poll_id)

    def get_user_stakes(self, tx: Transaction, user_id: str, poll_id: str) -> list[Stake]:
        return self._stakes.for_user(tx, user_id, poll_id)

    def get_user_stake_history(self, tx: Transaction, user_id: str) -> dict:
        return {"summary": self._stakes.user_summary(tx, user_id), "stakes": self._stakes.for_user(tx, user_id)}
