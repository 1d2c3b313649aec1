"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values, and
:func:`exit_code_for` maps a :class:`PoodleError` onto them so scripts can
tell a bad API key from a throttled account without parsing output.

Signal codes (130, 141, 143) are informational constants only; the
application never raises ``SystemExit`` with these values.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
    * :func:`exit_code_for` - Map a send error to its exit code.
"""

from __future__ import annotations

from enum import IntEnum

from poodle.domain.enums import ErrorKind
from poodle.domain.results import PoodleError


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0-1: generic success / failure
    * 13: EACCES (API key rejected)
    * 22: EINVAL
    * 69: EX_UNAVAILABLE (sysexits.h)
    * 75: EX_TEMPFAIL (sysexits.h)
    * 78: EX_CONFIG (sysexits.h)
    * 110: ETIMEDOUT
    * 128+N: signal N (informational only)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.RATE_LIMITED)
        75
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    RATE_LIMITED = 75
    CONFIG_ERROR = 78
    TIMEOUT = 110
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


_KIND_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.VALIDATION_ERROR: ExitCode.INVALID_ARGUMENT,
    ErrorKind.UNPROCESSABLE_ENTITY: ExitCode.INVALID_ARGUMENT,
    ErrorKind.UNAUTHORIZED: ExitCode.PERMISSION_DENIED,
    ErrorKind.FORBIDDEN: ExitCode.PERMISSION_DENIED,
    ErrorKind.PAYMENT_REQUIRED: ExitCode.PERMISSION_DENIED,
    ErrorKind.RATE_LIMIT_EXCEEDED: ExitCode.RATE_LIMITED,
    ErrorKind.TIMEOUT: ExitCode.TIMEOUT,
}


def exit_code_for(error: PoodleError) -> ExitCode:
    """Return the exit code for a failed send.

    Local configuration failures exit with ``CONFIG_ERROR``; transport and
    server failures fall back to ``DELIVERY_FAILURE``.

    Example:
        >>> exit_code_for(PoodleError(kind=ErrorKind.UNAUTHORIZED, message="Invalid API key", status_code=401))
        <ExitCode.PERMISSION_DENIED: 13>
        >>> exit_code_for(PoodleError(kind=ErrorKind.VALIDATION_ERROR, message="x", details={"source": "configuration"}))
        <ExitCode.CONFIG_ERROR: 78>
        >>> exit_code_for(PoodleError(kind=ErrorKind.DNS_ERROR, message="x"))
        <ExitCode.DELIVERY_FAILURE: 69>
    """
    if error.kind is ErrorKind.VALIDATION_ERROR and error.details.get("source") == "configuration":
        return ExitCode.CONFIG_ERROR
    return _KIND_EXIT_CODES.get(error.kind, ExitCode.DELIVERY_FAILURE)


__all__ = ["ExitCode", "exit_code_for"]
