"""Shadow consensus - gap between public (True Self) and private (Shadow) votes."""

from collections.abc import Callable
from datetime import datetime

import polars as pl
from loguru import logger

from app.errors import NotFoundError, StateError
from app.models import ConsensusReport, ConsensusSnapshot, DemographicGap
from app.models.common import FINISHED_POLL_STATUSES, IdentityMode, VoteOption
from app.repositories import ConsensusRepository, PollRepository, Transaction, VoteRepository
from helpers import formulas


class ShadowConsensusAnalyzer:
    """Computes and stores one snapshot per closed poll."""

    def __init__(
        self,
        consensus_repo: ConsensusRepository,
        poll_repo: PollRepository,
        vote_repo: VoteRepository,
        clock: Callable[[], datetime],
    ):
        self._snapshots = consensus_repo
        self._polls = poll_repo
        self._votes = vote_repo
        self._clock = clock
        logger.debug("ShadowConsensusAnalyzer initialized")

    def calculate(self, tx: Transaction, poll_id: str) -> ConsensusSnapshot:
        """Recompute the snapshot; repeated calls overwrite the previous one."""
        poll = self._polls.require(tx, poll_id)
        if poll.status not in FINISHED_POLL_STATUSES:
            raise StateError(f"Shadow consensus needs a closed poll, {poll_id} is {poll.status}")

        counts = {mode: {o: 0 for o in VoteOption} for mode in IdentityMode}
        for row in self._votes.breakdown(tx, poll_id):
            counts[IdentityMode(row["identity_mode"])][VoteOption(row["vote_option"])] = int(row["count"])
        ts, sh = counts[IdentityMode.TRUE_SELF], counts[IdentityMode.SHADOW]
        ts_total, sh_total = sum(ts.values()), sum(sh.values())
        if ts_total + sh_total == 0:
            raise StateError(f"No votes found for poll {poll_id}")

        ts_pct = formulas.yes_percentage(ts[VoteOption.YES], ts_total)
        sh_pct = formulas.yes_percentage(sh[VoteOption.YES], sh_total)
        gap = abs(ts_pct - sh_pct)
        ci = (formulas.wald_interval(ts[VoteOption.YES], ts_total) + formulas.wald_interval(sh[VoteOption.YES], sh_total)) / 2

        snapshot = ConsensusSnapshot(
            poll_id=poll_id,
            true_self_yes_count=ts[VoteOption.YES],
            true_self_no_count=ts[VoteOption.NO],
            true_self_abstain_count=ts[VoteOption.ABSTAIN],
            shadow_yes_count=sh[VoteOption.YES],
            shadow_no_count=sh[VoteOption.NO],
            shadow_abstain_count=sh[VoteOption.ABSTAIN],
            true_self_yes_pct=round(ts_pct, 2),
            shadow_yes_pct=round(sh_pct, 2),
            gap_pct=round(gap, 2),
            gap_interpretation=formulas.classify_gap(gap, ci),
            confidence_interval=round(ci, 2),
            sample_size=ts_total + sh_total,
            trend_direction=formulas.trend_direction(ts_pct, sh_pct),
            recorded_at=self._clock(),
        )
        self._snapshots.upsert(tx, snapshot)
        logger.info(
            "Shadow consensus for poll {}: gap={}% ({}), trend={}",
            poll_id,
            snapshot.gap_pct,
            snapshot.gap_interpretation,
            snapshot.trend_direction,
        )
        return snapshot

    def get(self, tx: Transaction, poll_id: str) -> ConsensusSnapshot | None:
        return self._snapshots.get(tx, poll_id)

    def detailed_analysis(self, tx: Transaction, poll_id: str) -> ConsensusReport:
        """Snapshot plus likely cause and the gap per reputation bucket."""
        snapshot = self._snapshots.get(tx, poll_id)
        if snapshot is None:
            raise NotFoundError("Consensus snapshot", poll_id)
        poll = self._polls.require(tx, poll_id)

        return ConsensusReport(
            poll_id=poll_id,
            poll_title=poll.title,
            snapshot=snapshot,
            likely_cause=formulas.likely_cause(snapshot.gap_pct, snapshot.true_self_yes_pct, snapshot.shadow_yes_pct),
            by_reputation=self._by_reputation(tx, poll_id),
        )

    def _by_reputation(self, tx: Transaction, poll_id: str) -> list[DemographicGap]:
        rows = self._snapshots.reputation_breakdown(tx, poll_id)
        if not rows:
            return []

        df = pl.DataFrame(rows).with_columns(
            pl.col("reputation_at_vote").map_elements(formulas.reputation_bucket, return_dtype=pl.Utf8).alias("bucket"),
            (pl.col("vote_option") == VoteOption.YES.value).cast(pl.Int64).alias("is_yes"),
        )
        grouped = (
            df.group_by(["bucket", "identity_mode"])
            .agg(pl.col("is_yes").sum().alias("yes"), pl.len().alias("total"))
            .sort("bucket")
        )

        result = []
        for bucket in grouped["bucket"].unique().sort().to_list():
            part = grouped.filter(pl.col("bucket") == bucket)
            side = {r["identity_mode"]: r for r in part.iter_rows(named=True)}
            ts = side.get(IdentityMode.TRUE_SELF.value, {"yes": 0, "total": 0})
            sh = side.get(IdentityMode.SHADOW.value, {"yes": 0, "total": 0})
            ts_pct = formulas.yes_percentage(ts["yes"], ts["total"])
            sh_pct = formulas.yes_percentage(sh["yes"], sh["total"])
            result.append(
                DemographicGap(
                    reputation_range=bucket,
                    true_self_yes_pct=round(ts_pct, 1),
                    shadow_yes_pct=round(sh_pct, 1),
                    gap=round(abs(ts_pct - sh_pct), 1),
                    sample_size=ts["total"] + sh["total"],
                )
            )
        return result
