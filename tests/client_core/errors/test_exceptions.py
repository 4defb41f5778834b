"""
Tests for the client exception hierarchy.
"""

from client_core.errors import (
    ClientError,
    ConfigurationError,
    ErrorCategory,
    PermanentError,
)


class TestClientError:
    """Test base ClientError class."""

    def test_basic_error(self):
        err = ClientError("Something went wrong")
        assert err.message == "Something went wrong"
        assert err.cause is None
        assert err.context == {}
        assert err.category == ErrorCategory.UNKNOWN

    def test_error_with_cause(self):
        cause = ValueError("Invalid value")
        err = ClientError("Wrapper message", cause=cause)
        assert err.cause == cause
        assert str(err) == "Wrapper message | Caused by: Invalid value"

    def test_unknown_is_retryable(self):
        assert ClientError("Error").is_retryable is True

    def test_equality_by_type_and_message(self):
        assert ClientError("a") == ClientError("a")
        assert ClientError("a") != ClientError("b")
        assert ClientError("a") != PermanentError("a")


class TestConfigurationError:
    def test_is_permanent(self):
        err = ConfigurationError("net.dial_timeout must be > 0s, got 0s")
        assert isinstance(err, PermanentError)
        assert err.category == ErrorCategory.PERMANENT
        assert err.is_retryable is False

    def test_carries_field(self):
        err = ConfigurationError("bad", field="producer.timeout")
        assert err.field == "producer.timeout"
        assert err.context == {"field": "producer.timeout"}

    def test_without_field(self):
        err = ConfigurationError("bad")
        assert err.field is None
        assert err.context == {}
        assert str(err) == "bad"

    def test_hashable(self):
        assert len({ConfigurationError("a"), ConfigurationError("b")}) == 2

    def test_equal_errors_hash_equal(self):
        first = ConfigurationError("bad", field="net.dial_timeout")
        second = ConfigurationError("bad", field="net.dial_timeout")

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
