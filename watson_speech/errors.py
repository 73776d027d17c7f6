"""
Errors raised by watson-speech.

Every failure surfaces as a WatsonError subclass:

- AuthError: the IAM token exchange failed (InvalidApiKeyError when IAM
  rejects the key)
- TransportError: no response, or a non-2xx response from a service
- DeserializationError: a response body could not be decoded
- ConfigurationError / MissingCredentialsError: local setup problems

Nothing is retried inside the library. ``is_transient`` tells the caller
whether trying again may help.

Example:
    from watson_speech.errors import TransportError

    try:
        voices = await tts.list_voices()
    except TransportError as e:
        logger.error(f"Watson request failed: {e.status_code}")
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class ErrorCode(str, Enum):
    AUTH_ERROR = "AUTH_ERROR"
    INVALID_API_KEY = "INVALID_API_KEY"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorSeverity(str, Enum):
    CRITICAL = "critical"  # client unusable until reconfigured
    ERROR = "error"        # this call failed, the client is fine
    WARNING = "warning"


@dataclass
class ErrorContext:
    """
    Where a failure happened.

    Attributes:
        correlation_id: Short random ID to find the failure in logs
        timestamp: Unix time of the failure
        service: ``iam``, ``text_to_speech`` or ``speech_to_text``
        operation: Client method or IAM step that failed
        metadata: URL, method, status code, request ID, ...
    """

    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    timestamp: float = field(default_factory=time.time)
    service: Optional[str] = None
    operation: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class WatsonError(Exception):
    """
    Base class of all watson-speech errors.

    Subclasses set ``code``, ``severity`` and ``default_message``; the
    constructor only takes what varies per failure.
    """

    code: ClassVar[ErrorCode] = ErrorCode.UNKNOWN_ERROR
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR
    default_message: ClassVar[str] = "Watson request failed"
    default_service: ClassVar[Optional[str]] = None

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        is_transient: bool = False,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code
        self.is_transient = is_transient
        self.context = context or ErrorContext(service=self.default_service)
        self.cause = cause

    @property
    def error_code(self) -> ErrorCode:
        return self.code

    def to_dict(self) -> Dict[str, Any]:
        """Error as a dict for structured logs."""
        data = {
            "type": "error",
            "error_code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "is_transient": self.is_transient,
            "context": self.context.to_dict(),
        }
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code.value}, "
            f"status={self.status_code}, transient={self.is_transient}, "
            f"message={self.message[:50]!r})"
        )


class AuthError(WatsonError):
    """The IAM token exchange failed."""

    code = ErrorCode.AUTH_ERROR
    default_message = "IAM token exchange failed"
    default_service = "iam"


class InvalidApiKeyError(AuthError):
    """IAM did not accept the API key."""

    code = ErrorCode.INVALID_API_KEY
    default_message = "The request did not contain a valid API key"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = 401, **kwargs: Any):
        super().__init__(message, status_code=status_code, **kwargs)


class TransportError(WatsonError):
    """
    A service call got no response or a non-2xx one.

    ``status_code`` is None when no response was received. Unless given,
    ``is_transient`` follows ``is_transient_status(status_code)``.
    """

    code = ErrorCode.TRANSPORT_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        is_transient: Optional[bool] = None,
        **kwargs: Any,
    ):
        if is_transient is None:
            is_transient = is_transient_status(status_code)
        super().__init__(message, status_code=status_code, is_transient=is_transient, **kwargs)


class DeserializationError(WatsonError):
    """A response body did not decode into the expected shape."""

    code = ErrorCode.DESERIALIZATION_ERROR
    default_message = "Malformed response body"


class ConfigurationError(WatsonError):
    code = ErrorCode.CONFIG_ERROR
    severity = ErrorSeverity.CRITICAL
    default_message = "Invalid configuration"


class MissingCredentialsError(ConfigurationError):
    """No API key or service URL configured for a service."""

    code = ErrorCode.MISSING_CREDENTIALS

    def __init__(self, service: str, message: Optional[str] = None, **kwargs: Any):
        super().__init__(message or f"Missing credentials for {service}", **kwargs)
        self.service = service


def is_transient_status(status_code: Optional[int]) -> bool:
    """
    True for failures worth retrying: no response at all (reset, timeout),
    429, or any 5xx.
    """
    if status_code is None:
        return True
    return status_code == 429 or status_code >= 500


def is_transient_error(error: Exception) -> bool:
    if isinstance(error, WatsonError):
        return error.is_transient
    # ConnectionResetError and ConnectionRefusedError subclass ConnectionError
    return isinstance(error, (ConnectionError, TimeoutError))
