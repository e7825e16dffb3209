"""Tests for the error taxonomy and its API mapping."""

from datetime import datetime

import pytest

from app.errors import (
    AuthorityExhausted,
    ConcurrencyConflict,
    DependencyFailure,
    DuplicateVote,
    InvalidParameter,
    NotFoundError,
    RollbackWindowExpired,
    StateError,
    ValidationError,
)
from web.api.errors import ErrorResponse, error_response, handle_errors, status_for, validate_page


class TestStatusCodes:
    def test_subclasses_map_through_bases(self):
        assert status_for(InvalidParameter("x", ["bad"])) == 400
        assert status_for(DuplicateVote()) == 403
        assert status_for(AuthorityExhausted("done")) == 403
        assert status_for(NotFoundError("Poll", "p1")) == 404
        assert status_for(RollbackWindowExpired("a1", datetime(2025, 1, 1))) == 409
        assert status_for(ConcurrencyConflict("retry")) == 409
        assert status_for(StateError("nope")) == 409
        assert status_for(DependencyFailure("down")) == 503

    def test_retryable_flag(self):
        assert error_response(ConcurrencyConflict("retry")).retryable
        assert error_response(DependencyFailure("down")).retryable
        assert not error_response(StateError("nope")).retryable

    def test_details(self):
        response = error_response(InvalidParameter("poll_default_duration_days", ["too big"]))
        assert response.details == {"parameter": "poll_default_duration_days", "errors": ["too big"]}


class TestHandleErrors:
    def test_returns_error_response(self):
        @handle_errors
        def view():
            raise StateError("closed")

        response = view()
        assert isinstance(response, ErrorResponse)
        assert response.error == "StateError"
        assert response.message == "closed"

    def test_passes_results_through(self):
        @handle_errors
        def view(x):
            return x * 2

        assert view(2) == 4

    def test_other_exceptions_propagate(self):
        @handle_errors
        def view():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            view()


class TestPagination:
    def test_bounds(self):
        validate_page(1, 0)
        validate_page(200, 10)
        with pytest.raises(ValidationError):
            validate_page(0, 0)
        with pytest.raises(ValidationError):
            validate_page(10, -1)
