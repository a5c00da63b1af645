"""Outcome classification and bounded retry policy.

Each attempt ends in one of three states:

- SUCCESS: 2xx response without an ErrorResponse envelope
- RETRYABLE: Timeout, QuotaExceeded or RequestThrottled
- FATAL: everything else, surfaced immediately

Classification, backoff and the attempt loop are separate so each can be
tested on its own.
"""

import asyncio
import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

from mws_api.config.constants import QUOTA_EXCEEDED_BACKOFF_SECONDS
from mws_api.core.decoder import extract_error_details
from mws_api.core.errors import ErrorKind, MwsError
from mws_api.core.logger import setup_logger
from mws_api.core.models import RequestSettings
from mws_api.core.transport import TransportResponse, TransportTimeout

logger = setup_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]
Attempt = Callable[[int], Awaitable[TransportResponse]]

# (status, body marker, kind), checked in order
STATUS_MARKERS: Tuple[Tuple[int, str, ErrorKind], ...] = (
    (400, "InputStreamDisconnected", ErrorKind.INPUT_STREAM_DISCONNECTED),
    (400, "InvalidParameterValue", ErrorKind.INVALID_PARAMETER_VALUE),
    (401, "AccessDenied", ErrorKind.ACCESS_DENIED),
    (403, "InvalidAccessKeyId", ErrorKind.INVALID_ACCESS_KEY_ID),
    (403, "SignatureDoesNotMatch", ErrorKind.SIGNATURE_DOES_NOT_MATCH),
    (404, "InvalidAddress", ErrorKind.INVALID_ADDRESS),
    (500, "InternalError", ErrorKind.INTERNAL_ERROR),
    (503, "QuotaExceeded", ErrorKind.QUOTA_EXCEEDED),
    (503, "RequestThrottled", ErrorKind.THROTTLED),
)

ERROR_ENVELOPE = re.compile(r"<ErrorResponse.*>[\s\S]*</ErrorResponse>")


class Outcome(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one attempt; ``kind`` is None on success."""

    outcome: Outcome
    kind: Optional[ErrorKind] = None


SUCCESS = Classification(Outcome.SUCCESS)


def classify_response(response: TransportResponse) -> Classification:
    """Classify a completed HTTP exchange by status and body markers."""
    status, body = response.status_code, response.body or ""

    for marker_status, marker, kind in STATUS_MARKERS:
        if status == marker_status and marker in body:
            return _classified(kind)

    if ERROR_ENVELOPE.search(body):
        return _classified(ErrorKind.UNDEFINED_REMOTE)

    if 200 <= status < 300:
        return SUCCESS

    # Non-2xx without a recognizable error body
    return _classified(ErrorKind.UNDEFINED_REMOTE)


def classify_exception(error: Exception) -> Classification:
    """Classify an exception raised by an attempt; anything but a timeout is local."""
    if isinstance(error, TransportTimeout):
        return _classified(ErrorKind.TIMEOUT)
    return _classified(ErrorKind.LOCAL_TRANSPORT)


def _classified(kind: ErrorKind) -> Classification:
    outcome = Outcome.RETRYABLE if kind.is_retryable else Outcome.FATAL
    return Classification(outcome, kind)


def backoff_seconds(kind: ErrorKind, settings: RequestSettings) -> float:
    """Seconds to wait before the next attempt after a retryable failure."""
    if kind == ErrorKind.QUOTA_EXCEEDED:
        return QUOTA_EXCEEDED_BACKOFF_SECONDS
    if kind == ErrorKind.THROTTLED:
        return settings.throttle_backoff_seconds
    return 0


def error_for(
    kind: ErrorKind,
    response: Optional[TransportResponse] = None,
    cause: Optional[Exception] = None,
) -> MwsError:
    """Build the tagged error surfaced to the caller."""
    if response is None:
        message = f"{kind.value}: {cause}" if cause else kind.value
        return MwsError(kind, message)

    code, remote_message = extract_error_details(response.body)
    message = f"{kind.value} (HTTP {response.status_code})"
    if code or remote_message:
        message = f"{message}: {code or ''} {remote_message or ''}".rstrip()
    return MwsError(
        kind,
        message,
        status_code=response.status_code,
        body=response.body,
        code=code,
        remote_message=remote_message,
    )


class RetryEngine:
    """Runs attempts until success, a fatal classification, or the budget runs out."""

    def __init__(self, settings: RequestSettings, sleep: Optional[Sleep] = None):
        """
        Initialize engine.

        Args:
            settings: Retry budget and throttle backoff
            sleep: Async sleep used for backoff (default asyncio.sleep)
        """
        self.settings = settings
        self.sleep = sleep or asyncio.sleep

    async def run(self, attempt: Attempt, action: str = "") -> TransportResponse:
        """
        Execute ``attempt`` up to ``max_retries + 1`` times.

        Args:
            attempt: Coroutine factory taking the 1-based attempt number
            action: Action name, for logging

        Returns:
            The successful TransportResponse

        Raises:
            MwsError: Fatal classification, or RETRIES_EXHAUSTED
        """
        total = self.settings.max_retries + 1
        last_kind = None

        for number in range(1, total + 1):
            logger.info(
                f"{action} attempt {number}/{total}",
                extra={"action": action, "attempt": number},
            )

            response = None
            try:
                response = await attempt(number)
                classification = classify_response(response)
            except MwsError:
                raise
            except Exception as e:
                classification = classify_exception(e)
                cause = e
            else:
                cause = None

            if classification.outcome == Outcome.SUCCESS:
                return response

            kind = classification.kind
            if classification.outcome == Outcome.FATAL:
                logger.error(f"{action} failed with {kind.value}, not retrying")
                raise error_for(kind, response, cause)

            last_kind = kind
            if number == total:
                break

            delay = backoff_seconds(kind, self.settings)
            logger.warning(f"{action} {kind.value}, waiting {delay}s before retry")
            if delay > 0:
                await self.sleep(delay)

        logger.error(f"{action} failed after {total} attempts (last: {last_kind.value})")
        raise MwsError(
            ErrorKind.RETRIES_EXHAUSTED,
            f"Retries exhausted after {total} attempts (last: {last_kind.value})",
        )
