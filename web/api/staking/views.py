"""Staking API views - thin layer over services."""

from app.container import container
from web.api.errors import ErrorResponse, handle_errors

from .schemas import (
    CreateStakeRequest,
    DistributionResponse,
    PotentialRewardResponse,
    StakeHistoryResponse,
    StakePoolResponse,
    StakeResponse,
    StakesResponse,
    StakeSummary,
)


@handle_errors
def create_stake(request: CreateStakeRequest) -> StakeResponse | ErrorResponse:
    """Lock Gratium on a poll outcome."""
    with container.db.transaction() as tx:
        stake = container.staking.create_stake(
            tx,
            request.user_id,
            request.poll_id,
            request.identity_mode,
            request.position,
            request.amount,
            request.reasoning,
        )
    return StakeResponse.model_validate(stake)


@handle_errors
def get_pool(poll_id: str) -> StakePoolResponse | ErrorResponse:
    with container.db.transaction() as tx:
        pool = container.staking.get_pool(tx, poll_id)
    return StakePoolResponse.model_validate(pool)


@handle_errors
def get_potential_reward(poll_id: str, position: str, amount: int) -> PotentialRewardResponse | ErrorResponse:
    with container.db.transaction() as tx:
        preview = container.staking.calculate_potential_reward(tx, poll_id, position, amount)
    return PotentialRewardResponse(**preview)


@handle_errors
def get_my_stakes(user_id: str, poll_id: str) -> StakesResponse | ErrorResponse:
    with container.db.transaction() as tx:
        stakes = container.staking.get_user_stakes(tx, user_id, poll_id)
    return StakesResponse(items=[StakeResponse.model_validate(s) for s in stakes])


@handle_errors
def get_poll_stakes(poll_id: str) -> StakesResponse | ErrorResponse:
    with container.db.transaction() as tx:
        stakes = container.staking.get_poll_stakes(tx, poll_id)
    return StakesResponse(items=[StakeResponse.model_validate(s) for s in stakes])


@handle_errors
def get_stake_history(user_id: str) -> StakeHistoryResponse | ErrorResponse:
    with container.db.transaction() as tx:
        history = container.staking.get_user_stake_history(tx, user_id)
    return StakeHistoryResponse(
        user_id=user_id,
        summary=StakeSummary(**history["summary"]),
        items=[StakeResponse.model_validate(s) for s in history["stakes"]],
    )


@handle_errors
def resolve_pool(poll_id: str) -> DistributionResponse | ErrorResponse:
    """Settle the pool of a closed poll from its outcome."""
    with container.db.transaction() as tx:
        distribution = container.staking.resolve_from_poll(tx, poll_id)
    return DistributionResponse.model_validate(distribution)
