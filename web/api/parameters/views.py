"""Parameter and constitution API views - thin layer over services."""

from app.container import container
from web.api.errors import ErrorResponse, handle_errors

from .schemas import (
    ArticleResponse,
    ArticlesResponse,
    ConstitutionCheckRequest,
    ConstitutionCheckResponse,
    ParameterHistoryItem,
    ParameterHistoryResponse,
    ParameterResponse,
    ParametersResponse,
    ValidateParameterRequest,
    ValidationResultResponse,
    ViolationItem,
)


@handle_errors
def list_parameters(category: str | None = None, voteable_only: bool = False) -> ParametersResponse | ErrorResponse:
    with container.db.transaction() as tx:
        params = container.registry.list_parameters(tx, category, voteable_only)
    return ParametersResponse(items=[ParameterResponse.model_validate(p) for p in params])


@handle_errors
def get_parameter(name: str) -> ParameterResponse | ErrorResponse:
    with container.db.transaction() as tx:
        param = container.registry.get_parameter(tx, name)
    return ParameterResponse.model_validate(param)


@handle_errors
def validate_parameter(request: ValidateParameterRequest) -> ValidationResultResponse | ErrorResponse:
    """Dry-run a proposed value against the whitelist."""
    with container.db.transaction() as tx:
        result = container.registry.validate_parameter_value(tx, request.name, request.value)
    return ValidationResultResponse.model_validate(result)


@handle_errors
def get_parameter_history(name: str) -> ParameterHistoryResponse | ErrorResponse:
    with container.db.transaction() as tx:
        history = container.registry.voting_history(tx, name)
    return ParameterHistoryResponse(name=name, items=[ParameterHistoryItem(**h) for h in history])


@handle_errors
def get_articles() -> ArticlesResponse | ErrorResponse:
    with container.db.transaction() as tx:
        articles = container.article_repo.all(tx)
    return ArticlesResponse(items=[ArticleResponse.model_validate(a) for a in articles])


@handle_errors
def check_constitution(request: ConstitutionCheckRequest) -> ConstitutionCheckResponse | ErrorResponse:
    result = container.guard.check(request.parameter_name, request.proposed_value, request.description)
    return ConstitutionCheckResponse(
        is_violation=result.is_violation,
        violations=[ViolationItem(**v) for v in result.violations],
    )
