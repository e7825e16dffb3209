"""Dependency Injection container - initialized at app startup."""

import random
from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger

import settings
from app.repositories import (
    ActionRepository,
    ArticleRepository,
    ConsensusRepository,
    Database,
    DelegationRepository,
    ParameterRepository,
    PollRepository,
    RollbackRequestRepository,
    StakePoolRepository,
    StakeRepository,
    Transaction,
    VoteRepository,
)
from app.services import (
    ActionService,
    ConstitutionalGuard,
    DelegationService,
    ParameterRegistry,
    PollService,
    RollbackService,
    ShadowConsensusAnalyzer,
    StakePoolEngine,
    VoteService,
)
from app.services.collaborators import RemoteIdentity, RemoteReputation, StoreLedger, StoreProfiles
from platform_client import IdentityClient, ReputationClient
from settings.governance import GovernanceConfig


def utc_now() -> datetime:
    """Naive UTC timestamp, as stored in DuckDB TIMESTAMP columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        db: Database | None = None,
        config: GovernanceConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
        force: bool = False,
    ) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized and not force:
            return

        self.config = config or GovernanceConfig.from_env()
        self.clock = clock
        self.db = db or Database()

        # Repositories (singletons)
        self.poll_repo = PollRepository()
        self.vote_repo = VoteRepository()
        self.delegation_repo = DelegationRepository()
        self.pool_repo = StakePoolRepository()
        self.stake_repo = StakeRepository()
        self.parameter_repo = ParameterRepository()
        self.article_repo = ArticleRepository()
        self.action_repo = ActionRepository()
        self.rollback_request_repo = RollbackRequestRepository()
        self.consensus_repo = ConsensusRepository()

        # Collaborators
        self.ledger = StoreLedger(clock)
        self.profiles = StoreProfiles(clock, self.config.default_reputation)
        self.reputation = self.profiles
        self.identity = self.profiles
        if settings.REPUTATION_API_URL:
            self.reputation = RemoteReputation(
                ReputationClient(settings.REPUTATION_API_URL, settings.API_TIMEOUT),
                self.config.default_reputation,
            )
        if settings.IDENTITY_API_URL:
            self.identity = RemoteIdentity(IdentityClient(settings.IDENTITY_API_URL, settings.API_TIMEOUT))

        # Services (with injected repos)
        self.guard = ConstitutionalGuard()
        self.registry = ParameterRegistry(
            parameter_repo=self.parameter_repo,
            poll_repo=self.poll_repo,
            config=self.config,
            clock=clock,
        )
        self.polls = PollService(
            poll_repo=self.poll_repo,
            vote_repo=self.vote_repo,
            pool_repo=self.pool_repo,
            registry=self.registry,
            guard=self.guard,
            ledger=self.ledger,
            reputation=self.reputation,
            identity=self.identity,
            config=self.config,
            clock=clock,
            rng=rng,
        )
        self.delegations = DelegationService(
            delegation_repo=self.delegation_repo,
            poll_repo=self.poll_repo,
            identity=self.identity,
            clock=clock,
        )
        self.votes = VoteService(
            poll_repo=self.poll_repo,
            vote_repo=self.vote_repo,
            delegations=self.delegations,
            reputation=self.reputation,
            identity=self.identity,
            config=self.config,
            clock=clock,
            rng=rng,
        )
        self.consensus = ShadowConsensusAnalyzer(
            consensus_repo=self.consensus_repo,
            poll_repo=self.poll_repo,
            vote_repo=self.vote_repo,
            clock=clock,
        )
        self.staking = StakePoolEngine(
            pool_repo=self.pool_repo,
            stake_repo=self.stake_repo,
            poll_repo=self.poll_repo,
            registry=self.registry,
            ledger=self.ledger,
            reputation=self.reputation,
            identity=self.identity,
            config=self.config,
            clock=clock,
        )
        self.actions = ActionService(
            action_repo=self.action_repo,
            polls=self.polls,
            registry=self.registry,
            config=self.config,
            clock=clock,
        )
        self.rollback = RollbackService(
            action_repo=self.action_repo,
            request_repo=self.rollback_request_repo,
            poll_repo=self.poll_repo,
            polls=self.polls,
            registry=self.registry,
            reputation=self.reputation,
            identity=self.identity,
            metrics=self.profiles,
            config=self.config,
            clock=clock,
        )

        self._initialized = True
        logger.debug("Container initialized (db={})", self.db.path)

    def seed(self, tx: Transaction) -> dict[str, int]:
        """Load the parameter whitelist and constitutional articles; existing rows are kept."""
        parameters = self.registry.seed(tx)
        existing = self.article_repo.existing_numbers(tx)
        df = self.guard.seed_frame(self.clock())
        articles = self.article_repo.bulk_insert(tx, df.filter(~df["number"].is_in(list(existing))))
        return {"parameters": parameters, "articles": articles}


# Global container instance
container = Container()
