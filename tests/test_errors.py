"""
Tests for the watson-speech error hierarchy

These tests verify:
1. Exception hierarchy and error codes
2. Transient vs permanent classification
3. Error context serialization

Run with: pytest tests/test_errors.py -v
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from watson_speech.errors import (
    AuthError,
    ConfigurationError,
    DeserializationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    InvalidApiKeyError,
    MissingCredentialsError,
    TransportError,
    WatsonError,
    is_transient_error,
    is_transient_status,
)


class TestErrorHierarchy:
    """Tests for exception classes."""

    @pytest.mark.parametrize("error,code", [
        (AuthError(), ErrorCode.AUTH_ERROR),
        (InvalidApiKeyError(), ErrorCode.INVALID_API_KEY),
        (TransportError("failed"), ErrorCode.TRANSPORT_ERROR),
        (DeserializationError(), ErrorCode.DESERIALIZATION_ERROR),
        (ConfigurationError("bad"), ErrorCode.CONFIG_ERROR),
        (MissingCredentialsError("text_to_speech"), ErrorCode.MISSING_CREDENTIALS),
    ])
    def test_error_codes(self, error, code):
        """Each error type should carry its code and derive from WatsonError."""
        assert isinstance(error, WatsonError)
        assert error.error_code == code

    def test_invalid_api_key_is_auth_error(self):
        """InvalidApiKeyError should be catchable as AuthError."""
        error = InvalidApiKeyError()

        assert isinstance(error, AuthError)
        assert error.status_code == 401

    def test_auth_error_default_context(self):
        """AuthError should default to the iam service context."""
        assert AuthError().context.service == "iam"

    def test_missing_credentials_message(self):
        """Should name the service."""
        error = MissingCredentialsError("speech_to_text")

        assert "speech_to_text" in str(error)
        assert error.service == "speech_to_text"
        assert error.severity == ErrorSeverity.CRITICAL

    def test_cause_preserved(self):
        """The original exception should be kept."""
        cause = ValueError("boom")
        error = DeserializationError("bad body", cause=cause)

        assert error.cause is cause


class TestTransientClassification:
    """Tests for transient classification."""

    @pytest.mark.parametrize("status,expected", [
        (None, True),
        (429, True),
        (500, True),
        (503, True),
        (400, False),
        (401, False),
        (404, False),
    ])
    def test_transient_status(self, status, expected):
        """No response, 429 and 5xx are transient."""
        assert is_transient_status(status) is expected
        assert TransportError("failed", status_code=status).is_transient is expected

    def test_explicit_transient_flag_wins(self):
        """An explicit flag should override the status classification."""
        assert TransportError("failed", status_code=500, is_transient=False).is_transient is False

    def test_is_transient_error(self):
        """Should classify watson and builtin errors."""
        assert is_transient_error(TransportError("reset")) is True
        assert is_transient_error(AuthError(is_transient=True)) is True
        assert is_transient_error(DeserializationError()) is False
        assert is_transient_error(ConnectionResetError()) is True
        assert is_transient_error(ValueError()) is False


class TestErrorSerialization:
    """Tests for to_dict and repr."""

    def test_to_dict(self):
        """Should include code, message and context."""
        context = ErrorContext(service="text_to_speech", operation="synthesize")
        error = TransportError("text_to_speech synthesize returned 401", status_code=401, context=context)

        data = error.to_dict()

        assert data["error_code"] == "TRANSPORT_ERROR"
        assert data["is_transient"] is False
        assert data["context"]["service"] == "text_to_speech"
        assert data["context"]["operation"] == "synthesize"
        assert len(data["context"]["correlation_id"]) == 8

    def test_repr(self):
        """repr should name the class and code."""
        assert repr(AuthError("nope")).startswith("AuthError(code=AUTH_ERROR")
