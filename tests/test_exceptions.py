"""Tests for the exception hierarchy and its agent-facing formatting."""

from __future__ import annotations

import pytest

from parliament_context.shared.exceptions import (
    APIError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidParameterError,
    InvalidQueryError,
    NetworkError,
    ParliamentContextError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "parent"),
        [
            (RateLimitError(), APIError),
            (NetworkError(), APIError),
            (ServiceUnavailableError(), APIError),
            (InvalidQueryError(42), ValidationError),
            (InvalidParameterError("limit", "ten", "an integer"), ValidationError),
            (ParseError("bad"), DataError),
            (ConfigurationError("bad"), ParliamentContextError),
        ],
    )
    def test_subclasses(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ParliamentContextError)

    def test_transient_errors_are_retryable(self):
        assert RateLimitError().retryable is True
        assert NetworkError().retryable is True
        assert ServiceUnavailableError().severity is ErrorSeverity.TRANSIENT

    def test_validation_errors_are_warnings(self):
        error = InvalidQueryError(None)
        assert error.severity is ErrorSeverity.WARNING
        assert error.category is ErrorCategory.VALIDATION
        assert error.retryable is False


class TestMessages:
    def test_invalid_query_carries_suggestion(self):
        error = InvalidQueryError(123)
        assert str(error) == "Invalid query: Query must be a string"
        assert error.context.input_value == 123
        assert error.context.suggestion
        assert "retrieve_parliament_context" in (error.context.example or "")

    def test_invalid_parameter_message(self):
        error = InvalidParameterError("limit", True, "an integer")
        assert "limit" in str(error)
        assert "True" in str(error)
        assert error.context.suggestion == "Expected an integer"

    def test_service_unavailable_prefixes_service(self):
        error = ServiceUnavailableError("HTTP 503", service="ParliamentAPI")
        assert str(error) == "ParliamentAPI: HTTP 503"

    def test_parse_error_source(self):
        assert str(ParseError("oops", source="search")) == "Parse error (search): oops"
        assert str(ParseError("oops")) == "Parse error: oops"

    def test_rate_limit_retry_after(self):
        error = RateLimitError(retry_after=12.5)
        assert error.context.retry_after == 12.5
        assert error.to_dict()["retry_after_seconds"] == 12.5


class TestSerialization:
    def test_to_dict(self):
        error = InvalidQueryError(None)
        data = error.to_dict()
        assert data["error"] == str(error)
        assert data["category"] == "validation"
        assert data["severity"] == "warning"
        assert data["retryable"] is False
        assert "suggestion" in data
        assert "example" in data

    def test_to_dict_omits_empty_context(self):
        data = ParliamentContextError("plain").to_dict()
        assert set(data) == {"error", "category", "severity", "retryable"}

    def test_agent_message_markdown(self):
        error = ParliamentContextError(
            "Something failed",
            context=ErrorContext(suggestion="Try again", example="limit=10"),
        )
        message = error.to_agent_message()
        assert message.splitlines() == [
            "**Error**: Something failed",
            "**Suggestion**: Try again",
            "**Example**: `limit=10`",
        ]
