"""Parameters API."""

from web.api.parameters.views import (
    check_constitution,
    get_articles,
    get_parameter,
    get_parameter_history,
    list_parameters,
    validate_parameter,
)

__all__ = [
    "list_parameters",
    "get_parameter",
    "validate_parameter",
    "get_parameter_history",
    "get_articles",
    "check_constitution",
]
