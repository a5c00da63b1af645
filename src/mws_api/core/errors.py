"""Error taxonomy for the signed request pipeline.

Every failure surfaced to callers is a single ``MwsError`` tagged with an
``ErrorKind``. Transport and parser exceptions are converted at the edges
and never leak through.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure classifications."""

    CONFIGURATION = "ConfigurationError"
    LOCAL_TRANSPORT = "LocalTransportError"
    TIMEOUT = "Timeout"
    QUOTA_EXCEEDED = "QuotaExceeded"
    THROTTLED = "RequestThrottled"
    INPUT_STREAM_DISCONNECTED = "InputStreamDisconnected"
    INVALID_PARAMETER_VALUE = "InvalidParameterValue"
    ACCESS_DENIED = "AccessDenied"
    INVALID_ACCESS_KEY_ID = "InvalidAccessKeyId"
    SIGNATURE_DOES_NOT_MATCH = "SignatureDoesNotMatch"
    INVALID_ADDRESS = "InvalidAddress"
    INTERNAL_ERROR = "InternalError"
    UNDEFINED_REMOTE = "UndefinedRemoteError"
    MALFORMED_RESPONSE = "MalformedResponse"
    RETRIES_EXHAUSTED = "RetriesExhausted"

    @property
    def is_retryable(self) -> bool:
        """True for kinds the retry policy recovers from locally."""
        return self in RETRYABLE_KINDS


RETRYABLE_KINDS = frozenset(
    {ErrorKind.TIMEOUT, ErrorKind.QUOTA_EXCEEDED, ErrorKind.THROTTLED}
)


class MwsError(Exception):
    """Failure of a single logical call, tagged with its classification.

    Attributes:
        kind: Classification from the taxonomy
        message: Human readable description
        status_code: HTTP status of the failing response, if any
        body: Raw response body, if any
        code: Remote error code from an ErrorResponse envelope, if any
        remote_message: Remote error message from an ErrorResponse envelope, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        code: Optional[str] = None,
        remote_message: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message or kind.value
        self.status_code = status_code
        self.body = body
        self.code = code
        self.remote_message = remote_message
        super().__init__(self.message)

    @property
    def is_retryable(self) -> bool:
        return self.kind.is_retryable

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value}, "
            f"status_code={self.status_code}, message={self.message!r})"
        )


class ConfigurationError(MwsError):
    """Raised when credentials, principal or region are missing or invalid."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.CONFIGURATION, message)
