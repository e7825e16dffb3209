"""Vote casting, changing and per-poll vote analytics."""

import random
import uuid
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import DuplicateVote, EligibilityError, NotFoundError, NotVerified, StateError, ValidationError
from app.models import Poll, Vote, VoteBreakdown
from app.models.common import IdentityMode, PollStatus, VoteOption
from app.repositories import PollRepository, Transaction, VoteRepository
from app.services.collaborators import IdentityService, ReputationService
from app.services.polls.delegation import DelegationService
from helpers import jitter, sections
from settings.governance import GovernanceConfig


class VoteService:
    """Weighted dual-identity voting.

    Every tally update happens in the same transaction as the vote row, and
    the store's (poll, user, identity) key rejects a concurrent duplicate.
    """

    def __init__(
        self,
        poll_repo: PollRepository,
        vote_repo: VoteRepository,
        delegations: DelegationService,
        reputation: ReputationService,
        identity: IdentityService,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
        rng: random.Random | None = None,
    ):
        self._polls = poll_repo
        self._votes = vote_repo
        self._delegations = delegations
        self._reputation = reputation
        self._identity = identity
        self._config = config
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        logger.debug("VoteService initialized")

    def _open_poll(self, tx: Transaction, poll_id: str) -> Poll:
        poll = self._polls.require(tx, poll_id)
        if poll.status != PollStatus.ACTIVE:
            raise StateError(f"Poll {poll_id} is not active (status: {poll.status})")
        now = self._clock()
        if now < poll.start_at:
            raise StateError(f"Voting on poll {poll_id} opens at {poll.start_at}")
        if now > poll.end_at:
            raise StateError(f"Voting window for poll {poll_id} has closed")
        return poll

    @staticmethod
    def _parse(option: str, identity_mode: str) -> tuple[VoteOption, IdentityMode]:
        try:
            return VoteOption(option), IdentityMode(identity_mode)
        except ValueError as exc:
            raise ValidationError(str(exc)) from None

    def _obfuscated(self, poll: Poll) -> tuple[datetime, datetime, int]:
        now = self._clock()
        displayed, seconds = jitter.obfuscate(now, poll.end_at, self._rng, self._config.max_jitter_seconds)
        return now, displayed, seconds

    def _new_vote(
        self,
        tx: Transaction,
        poll: Poll,
        user_id: str,
        identity_mode: IdentityMode,
        option: VoteOption,
        reasoning: str | None,
        delegated_by: str | None = None,
    ) -> Vote:
        section = sections.assign_section(user_id, poll.id, poll.start_at, identity_mode, self._config.section_count)
        multiplier = sections.multiplier_for(poll.section_multipliers, section)
        now, displayed, seconds = self._obfuscated(poll)
        return Vote(
            id=str(uuid.uuid4()),
            poll_id=poll.id,
            user_id=user_id,
            identity_mode=identity_mode,
            vote_option=option,
            section=section,
            section_multiplier=multiplier,
            base_weight=self._config.base_vote_weight,
            final_weight=sections.final_weight(multiplier, self._config.base_vote_weight),
            reasoning=reasoning,
            change_count=0,
            is_delegated=delegated_by is not None,
            delegated_by=delegated_by,
            reputation_at_vote=self._reputation.get_score(tx, user_id),
            timing_jitter_seconds=seconds,
            cast_at=now,
            displayed_at=displayed,
            updated_at=now,
        )

    def _move_tally(self, tx: Transaction, vote: Vote, new_option: VoteOption) -> None:
        now = self._clock()
        self._polls.apply_tally(tx, vote.poll_id, vote.vote_option, -1, -vote.final_weight, now)
        self._polls.apply_tally(tx, vote.poll_id, new_option, 1, vote.final_weight, now)

    def cast_vote(
        self,
        tx: Transaction,
        user_id: str,
        poll_id: str,
        identity_mode: str,
        option: str,
        reasoning: str | None = None,
    ) -> Vote:
        """Cast a first vote for one identity; a manual vote replaces a delegated one."""
        option, identity_mode = self._parse(option, identity_mode)
        poll = self._open_poll(tx, poll_id)
        if not self._identity.is_verified_human(tx, user_id):
            raise NotVerified(user_id)

        existing = self._votes.find(tx, poll_id, user_id, identity_mode)
        if existing is not None and not existing.is_delegated:
            raise DuplicateVote(f"Already voted on poll {poll_id} as {identity_mode}")
        if existing is not None:
            return self._override_delegated(tx, poll, existing, option, reasoning)

        vote = self._new_vote(tx, poll, user_id, identity_mode, option, reasoning)
        self._votes.insert(tx, vote)
        self._polls.apply_tally(tx, poll_id, option, 1, vote.final_weight, vote.cast_at)
        logger.info(
            "Vote cast on poll {}: identity={}, section={}, weight={}",
            poll_id,
            identity_mode,
            vote.section,
            vote.final_weight,
        )
        return vote

    def _override_delegated(
        self,
        tx: Transaction,
        poll: Poll,
        vote: Vote,
        option: VoteOption,
        reasoning: str | None,
    ) -> Vote:
        now, displayed, seconds = self._obfuscated(poll)
        self._move_tally(tx, vote, option)
        self._votes.update(
            tx,
            vote.id,
            vote_option=option,
            reasoning=reasoning,
            is_delegated=False,
            delegated_by=None,
            timing_jitter_seconds=seconds,
            cast_at=now,
            displayed_at=displayed,
            updated_at=now,
        )
        logger.info("Manual vote replaced delegated vote on poll {}", poll.id)
        return self._votes.require(tx, vote.id)

    def change_vote(
        self,
        tx: Transaction,
        user_id: str,
        poll_id: str,
        identity_mode: str,
        option: str,
        reasoning: str | None = None,
    ) -> Vote:
        """Change option and reasoning; section, multiplier and weight stay fixed."""
        option, identity_mode = self._parse(option, identity_mode)
        poll = self._open_poll(tx, poll_id)
        vote = self._votes.find(tx, poll_id, user_id, identity_mode)
        if vote is None:
            raise NotFoundError("Vote", f"{poll_id}/{identity_mode}")
        if vote.change_count >= self._config.max_vote_changes:
            raise EligibilityError(f"Maximum vote changes ({self._config.max_vote_changes}) reached")

        now, displayed, seconds = self._obfuscated(poll)
        self._move_tally(tx, vote, option)
        self._votes.update(
            tx,
            vote.id,
            vote_option=option,
            reasoning=reasoning if reasoning is not None else vote.reasoning,
            change_count=vote.change_count + 1,
            is_delegated=False,
            delegated_by=None,
            timing_jitter_seconds=seconds,
            displayed_at=displayed,
            updated_at=now,
        )
        logger.info("Vote changed on poll {}: {} -> {} (change #{})", poll_id, vote.vote_option, option, vote.change_count + 1)
        return self._votes.require(tx, vote.id)

    def cast_delegated_votes(
        self,
        tx: Transaction,
        delegate_id: str,
        poll_id: str,
        option: str,
        reasoning: str | None = None,
    ) -> list[Vote]:
        """Vote for every delegator covering this poll who has not voted with that identity."""
        option = self._parse(option, IdentityMode.TRUE_SELF)[0]
        poll = self._open_poll(tx, poll_id)
        if not self._identity.is_verified_human(tx, delegate_id):
            raise NotVerified(delegate_id)

        cast = []
        for delegation in self._delegations.delegated_to(tx, delegate_id, poll):
            if self._votes.find(tx, poll_id, delegation.delegator_id, delegation.identity_mode) is not None:
                continue
            if not self._identity.is_verified_human(tx, delegation.delegator_id):
                logger.debug("Skipping unverified delegator on poll {}", poll_id)
                continue
            vote = self._new_vote(
                tx,
                poll,
                delegation.delegator_id,
                IdentityMode(delegation.identity_mode),
                option,
                reasoning,
                delegated_by=delegate_id,
            )
            self._votes.insert(tx, vote)
            self._polls.apply_tally(tx, poll_id, option, 1, vote.final_weight, vote.cast_at)
            cast.append(vote)

        logger.info("Delegate cast {} votes on poll {}", len(cast), poll_id)
        return cast

    # Queries

    def get_user_votes(self, tx: Transaction, user_id: str, poll_id: str) -> list[Vote]:
        self._polls.require(tx, poll_id)
        return self._votes.for_user(tx, poll_id, user_id)

    def get_poll_votes(self, tx: Transaction, poll_id: str) -> list[Vote]:
        self._polls.require(tx, poll_id)
        return self._votes.for_poll(tx, poll_id)

    def get_vote_breakdown(self, tx: Transaction, poll_id: str) -> VoteBreakdown:
        self._polls.require(tx, poll_id)
        result = {mode: {o.value: {"count": 0, "weight": 0} for o in VoteOption} for mode in IdentityMode}
        for row in self._votes.breakdown(tx, poll_id):
            result[IdentityMode(row["identity_mode"])][row["vote_option"]] = {
                "count": int(row["count"]),
                "weight": int(row["weight"]),
            }
        return VoteBreakdown(poll_id=poll_id, true_self=result[IdentityMode.TRUE_SELF], shadow=result[IdentityMode.SHADOW])

    def section_distribution(self, tx: Transaction, poll_id: str) -> list[dict]:
        """Votes, share and weighted votes per section."""
        poll = self._polls.require(tx, poll_id)
        rows = {r["section"]: r for r in self._votes.sections(tx, poll_id)}
        total = sum(int(r["count"]) for r in rows.values())
        return [
            {
                "section": s,
                "multiplier": m,
                "votes": int(rows[s]["count"]) if s in rows else 0,
                "pct": round(int(rows[s]["count"]) / total * 100, 2) if s in rows and total else 0.0,
                "weighted_votes": int(rows[s]["weight"]) if s in rows else 0,
            }
            for s, m in enumerate(poll.section_multipliers, start=1)
        ]

    def jitter_report(self, tx: Transaction, poll_id: str) -> dict:
        votes = self.get_poll_votes(tx, poll_id)
        stats = jitter.jitter_stats([v.timing_jitter_seconds for v in votes])
        stats["max_formatted"] = jitter.format_jitter_duration(stats["max"])
        return stats
