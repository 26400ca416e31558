"""Tests for error types."""

from __future__ import annotations

import errno

from portguard.errors import (
    BindError,
    InvalidPortError,
    NoAvailablePortError,
    PortGuardError,
    PortRangeExceededError,
    ProbeTimeoutError,
    UnknownBindError,
)


class TestErrors:
    """Tests for the error taxonomy."""

    def test_base_error_defaults(self):
        """Test: Base error has a default code."""
        error = PortGuardError("something broke")
        assert error.to_dict() == {"error": "something broke", "code": "UNKNOWN_ERROR"}

    def test_invalid_port_is_value_error(self):
        """Test: InvalidPortError can be caught as ValueError."""
        error = InvalidPortError(0)
        assert isinstance(error, ValueError)
        assert error.message == "Invalid port number: 0"
        assert error.to_dict() == {"error": "Invalid port number: 0", "code": "INVALID_PORT", "port": 0}

    def test_bind_error_carries_cause(self):
        """Test: BindError keeps the OS error and errno."""
        cause = OSError(errno.EADDRINUSE, "Address already in use")
        error = BindError(8080, "localhost", cause)
        assert error.cause is cause
        assert error.errno == errno.EADDRINUSE
        assert error.message == "Failed to bind localhost:8080: Address already in use"
        assert error.to_dict()["errno"] == errno.EADDRINUSE

    def test_bind_error_without_strerror(self):
        """Test: Causes without strerror fall back to str()."""
        error = BindError(8080, "bad-host", OSError("name resolution failed"))
        assert error.errno is None
        assert "name resolution failed" in error.message

    def test_timeout_is_builtin_timeout(self):
        """Test: ProbeTimeoutError can be caught as TimeoutError."""
        error = ProbeTimeoutError(8080, "localhost", 5.0)
        assert isinstance(error, TimeoutError)
        assert error.message == "Port bind timeout after 5 seconds: localhost:8080"
        assert error.to_dict()["timeout"] == 5.0

    def test_unknown_bind_error(self):
        """Test: UnknownBindError names the target."""
        error = UnknownBindError(8080, "localhost")
        assert error.code == "UNKNOWN_BIND_ERROR"
        assert "localhost:8080" in error.message

    def test_range_errors(self):
        """Test: Scan errors describe the port or range."""
        exceeded = PortRangeExceededError(65536)
        assert exceeded.message == "Port number exceeded maximum (65535): 65536"

        exhausted = NoAvailablePortError(8000, 8009, "localhost")
        assert exhausted.message == "No available port found in range 8000-8009 on localhost"
        assert exhausted.to_dict()["range"] == [8000, 8009]

    def test_bind_error_with_encoding_failure(self):
        """Test: BindError accepts a non-OSError cause from host encoding."""
        cause = UnicodeError("encoding with 'idna' codec failed (label empty or too long)")
        error = BindError(8080, "a" * 64 + ".example", cause)
        assert error.cause is cause
        assert error.errno is None
        assert "label empty or too long" in error.message
        assert error.to_dict()["errno"] is None
