#!/usr/bin/env python3
"""
Operator commands for the governance store.

Usage:
    python manage.py init                  # Create tables and seed parameters/articles
    python manage.py process-due           # Activate, close and settle polls; run due actions
    python manage.py unfreeze              # Unfreeze parameters whose freeze has ended
    python manage.py consensus <poll_id>   # Calculate and print the shadow consensus report
    python manage.py status <action_id>    # Print rollback eligibility of an action
"""

import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app.container import container
from app.errors import GovernanceError
from settings import DB_PATH
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def run_init():
    """Create tables and load seed data."""
    with container.db.transaction() as tx:
        counts = container.seed(tx)
    print(f"\n✅ Store ready at {DB_PATH}")
    print(f"  Parameters added: {counts['parameters']}")
    print(f"  Articles added: {counts['articles']}\n")


def run_process_due():
    """One sweep: poll transitions, stake settlement, scheduled actions."""
    with container.db.transaction() as tx:
        activated = container.polls.activate_due_polls(tx)
    logger.info("Activated {} polls", len(activated))

    results = container.polls.close_expired_polls(container.db)
    for result in results:
        try:
            with container.db.transaction() as tx:
                container.staking.resolve_from_poll(tx, result.poll_id)
        except GovernanceError as exc:
            logger.error("Stake settlement for poll {} failed: {}", result.poll_id, exc.message)

    report = container.actions.process_due_actions(container.db)

    print("\n" + "=" * 60)
    print("SWEEP REPORT")
    print("=" * 60)
    print(f"  Polls activated: {len(activated)}")
    print(f"  Polls closed: {len(results)}")
    for result in results:
        print(f"    {result.poll_id}: {result.status} (yes {result.yes_pct}%, quorum {'met' if result.quorum_met else 'missed'})")
    print(f"  Actions executed: {len(report['executed'])}")
    print(f"  Actions failed: {len(report['failed'])}")
    for error in report["errors"]:
        print(f"    ⚠️  {error}")
    print("=" * 60 + "\n")
    return not report["failed"]


def run_unfreeze():
    with container.db.transaction() as tx:
        names = container.registry.unfreeze_expired(tx)
    print(f"\nUnfrozen parameters: {', '.join(names) if names else 'none'}\n")


def run_consensus(poll_id: str):
    """Calculate the snapshot for a closed poll and print the report."""
    with container.db.transaction() as tx:
        container.consensus.calculate(tx, poll_id)
        report = container.consensus.detailed_analysis(tx, poll_id)

    s = report.snapshot
    print("\n" + "=" * 60)
    print(f"SHADOW CONSENSUS: {report.poll_title}")
    print("=" * 60)
    print(f"  True Self yes: {s.true_self_yes_pct}% ({s.true_self_yes_count}/{s.true_self_yes_count + s.true_self_no_count + s.true_self_abstain_count})")
    print(f"  Shadow yes:    {s.shadow_yes_pct}% ({s.shadow_yes_count}/{s.shadow_yes_count + s.shadow_no_count + s.shadow_abstain_count})")
    print(f"  Gap: {s.gap_pct}% ± {s.confidence_interval} ({s.gap_interpretation}, {s.trend_direction})")
    print(f"  {report.likely_cause}")
    for gap in report.by_reputation:
        print(f"    reputation {gap.reputation_range}: gap {gap.gap}% (n={gap.sample_size})")
    print("=" * 60 + "\n")


def run_status(action_id: str):
    with container.db.transaction() as tx:
        status = container.rollback.rollback_status(tx, action_id)
        authority = container.rollback.founder_authority(tx)

    mark = "✅" if status.can_rollback else "❌"
    print(f"\nAction {action_id} ({status.action_status}) {mark}")
    if status.reason:
        print(f"  Reason: {status.reason}")
    print(f"  Window expires: {status.window_expires_at} ({status.hours_remaining}h left)")
    print(f"  Parameter rollbacks: {status.rollback_count}, frozen: {status.parameter_frozen}")
    if status.open_rollback_poll_id:
        print(f"  Open rollback poll: {status.open_rollback_poll_id}")
    print(
        f"  Founder tokens: {authority.tokens_remaining}/{authority.tokens_total}, "
        f"authority {authority.authority_percentage}%\n"
    )


def main():
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        sys.exit(1)

    container.init()
    command, rest = args[0], args[1:]

    try:
        if command == "init":
            run_init()
        elif command == "process-due":
            if not run_process_due():
                sys.exit(2)
        elif command == "unfreeze":
            run_unfreeze()
        elif command in ("consensus", "status") and len(rest) == 1:
            (run_consensus if command == "consensus" else run_status)(rest[0])
        else:
            print(__doc__)
            sys.exit(1)
    except GovernanceError as exc:
        logger.error("{} failed: {}", command, exc.message)
        sys.exit(1)
    finally:
        container.db.close()


if __name__ == "__main__":
    main()
