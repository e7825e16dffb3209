"""Polls API."""

from web.api.polls.views import (
    close_poll,
    create_poll,
    get_poll,
    get_section_distribution,
    get_statistics,
    list_polls,
)

__all__ = [
    "create_poll",
    "close_poll",
    "get_poll",
    "list_polls",
    "get_statistics",
    "get_section_distribution",
]
