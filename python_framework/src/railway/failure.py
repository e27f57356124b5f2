"""
Failure description — structured error information for the failure track.

Error codes are organized by the stage of the authorization pipeline that
produced them, so the command-line driver can name the failing stage without
inspecting messages.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    - Input stages: READ, INVALID_INPUT_KIND, CERTIFICATE_PARSE
    - Derivation: FINGERPRINT_TOO_SHORT
    - Persistence: STATE_WRITE
    - Wiring: CONFIGURATION
    """

    READ_ERROR = "READ_ERROR"
    """Certificate input could not be read (missing file, unreadable stream)."""

    INVALID_INPUT_KIND = "INVALID_INPUT_KIND"
    """PEM armor present but not a single CERTIFICATE block."""

    CERTIFICATE_PARSE_ERROR = "CERTIFICATE_PARSE_ERROR"
    """DER does not parse as a well-formed X.509 certificate structure."""

    FINGERPRINT_TOO_SHORT = "FINGERPRINT_TOO_SHORT"
    """Fingerprint hex is too short to derive a shard directory."""

    STATE_WRITE_ERROR = "STATE_WRITE_ERROR"
    """Filesystem failure creating the shard directory or marker file."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Invalid or unresolvable settings."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.READ_ERROR, "No such file")
    >>> desc.code
    <ErrorCode.READ_ERROR: 'READ_ERROR'>
    >>> desc.message
    'No such file'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> FailureDescription:
        return FailureDescription(code=code, message=message, exception=exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"
