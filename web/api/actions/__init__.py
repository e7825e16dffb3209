"""Actions API."""

from web.api.actions.views import (
    cancel_action,
    create_action,
    execute_action,
    get_action,
    list_pending,
    process_due,
)

__all__ = [
    "create_action",
    "execute_action",
    "cancel_action",
    "get_action",
    "list_pending",
    "process_due",
]
