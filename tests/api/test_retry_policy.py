"""
Tests for the retry policy.

Covers status classification, Retry-After parsing, which error kinds are
retried, and the backoff schedule.
"""

import pytest

from dreamscribe.api.errors import APIRequestError
from dreamscribe.api.retry import RetryPolicy, classify_status, parse_retry_after
from dreamscribe.models.ai_models import ErrorKind


def make_error(kind: ErrorKind, retry_after=None) -> APIRequestError:
    return APIRequestError(kind, "test failure", retry_after=retry_after)


class TestClassifyStatus:
    """Status code to error kind mapping."""

    @pytest.mark.parametrize("status,expected", [
        (400, ErrorKind.BAD_REQUEST),
        (401, ErrorKind.AUTH_ERROR),
        (403, ErrorKind.AUTH_ERROR),
        (404, ErrorKind.BAD_REQUEST),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.SERVICE_UNAVAILABLE),
        (503, ErrorKind.SERVICE_UNAVAILABLE),
    ])
    def test_classify_status(self, status, expected):
        assert classify_status(status) is expected


class TestParseRetryAfter:

    @pytest.mark.parametrize("value,expected", [
        ("5", 5.0),
        ("0.5", 0.5),
        (None, None),
        ("", None),
        ("Wed, 21 Oct 2015 07:28:00 GMT", None),
        ("-3", None),
    ])
    def test_parse_retry_after(self, value, expected):
        assert parse_retry_after(value) == expected


class TestRetryPolicy:
    """Test suite for RetryPolicy decisions."""

    @pytest.fixture
    def policy(self):
        return RetryPolicy(backoff_seconds=1.0, max_backoff_seconds=60.0)

    @pytest.mark.parametrize("kind", [
        ErrorKind.TIMEOUT,
        ErrorKind.RATE_LIMITED,
        ErrorKind.SERVICE_UNAVAILABLE,
        ErrorKind.NETWORK_ERROR,
    ])
    def test_transient_kinds_are_retryable(self, policy, kind):
        assert policy.is_retryable(make_error(kind)) is True

    @pytest.mark.parametrize("kind", [
        ErrorKind.AUTH_ERROR,
        ErrorKind.BAD_REQUEST,
        ErrorKind.INVALID_RESPONSE_SHAPE,
    ])
    def test_permanent_kinds_are_not_retryable(self, policy, kind):
        assert policy.is_retryable(make_error(kind)) is False

    def test_should_retry_respects_attempt_budget(self, policy):
        error = make_error(ErrorKind.TIMEOUT)

        assert policy.should_retry(error, attempt=0, retries=2) is True
        assert policy.should_retry(error, attempt=1, retries=2) is True
        assert policy.should_retry(error, attempt=2, retries=2) is False
        assert policy.should_retry(error, attempt=0, retries=0) is False

    def test_fixed_backoff_for_server_errors(self, policy):
        error = make_error(ErrorKind.SERVICE_UNAVAILABLE)

        assert [policy.backoff_for(error, attempt) for attempt in range(3)] == [1.0, 1.0, 1.0]

    def test_rate_limited_uses_retry_after(self, policy):
        assert policy.backoff_for(make_error(ErrorKind.RATE_LIMITED, retry_after=7.0), 0) == 7.0

    def test_rate_limited_without_header_backs_off_exponentially(self, policy):
        error = make_error(ErrorKind.RATE_LIMITED)

        assert [policy.backoff_for(error, attempt) for attempt in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_backoff_is_capped(self):
        policy = RetryPolicy(backoff_seconds=1.0, max_backoff_seconds=5.0)

        assert policy.backoff_for(make_error(ErrorKind.RATE_LIMITED, retry_after=120.0), 0) == 5.0
        assert policy.backoff_for(make_error(ErrorKind.RATE_LIMITED), 10) == 5.0
