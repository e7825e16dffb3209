"""Shadow consensus API views - thin layer over services."""

from app.container import container
from app.errors import NotFoundError
from web.api.errors import ErrorResponse, handle_errors

from .schemas import ConsensusReportResponse, ConsensusResponse


@handle_errors
def calculate_consensus(poll_id: str) -> ConsensusResponse | ErrorResponse:
    """Recompute and store the snapshot for a closed poll."""
    with container.db.transaction() as tx:
        snapshot = container.consensus.calculate(tx, poll_id)
    return ConsensusResponse.model_validate(snapshot)


@handle_errors
def get_consensus(poll_id: str) -> ConsensusResponse | ErrorResponse:
    with container.db.transaction() as tx:
        snapshot = container.consensus.get(tx, poll_id)
    if snapshot is None:
        raise NotFoundError("Consensus snapshot", poll_id)
    return ConsensusResponse.model_validate(snapshot)


@handle_errors
def get_consensus_report(poll_id: str) -> ConsensusReportResponse | ErrorResponse:
    """Detailed report; the snapshot must have been calculated."""
    with container.db.transaction() as tx:
        report = container.consensus.detailed_analysis(tx, poll_id)
    return ConsensusReportResponse.model_validate(report)
