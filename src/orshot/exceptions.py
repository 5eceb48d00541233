"""Exception hierarchy for orshot.

All exceptions inherit from :class:`OrshotError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`orshot.exit_codes`.
The API client raises exactly one classified error per failed request; the
command layer catches ``OrshotError``, prints the message and exits with the
error's code. Anything else reaching :func:`orshot.app.main` produces a crash
log and exits with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    OrshotError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- AuthenticationError  (exit 3)   no API key stored
    +-- UnauthorizedError    (exit 3)   HTTP 401
    +-- ForbiddenError       (exit 3)   HTTP 403
    +-- NotFoundError        (exit 4)   HTTP 404
    +-- UpstreamError        (exit 5)   any other non-2xx
    +-- NetworkError         (exit 6)
    +-- RateLimitedError     (exit 7)   HTTP 429
    +-- UnknownError         (exit 1)
    +-- ConfigError          (exit 1)
    +-- OutputError          (exit 1)
"""

from __future__ import annotations

from orshot.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_UPSTREAM_ERROR,
)


class OrshotError(Exception):
    """Base exception for all orshot errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`orshot.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OrshotError):
    """Raised for invalid CLI arguments (bad page list, unknown format)."""

    exit_code = EXIT_INVALID_USAGE


class AuthenticationError(OrshotError):
    """Raised when no API key is available to authenticate a request."""

    exit_code = EXIT_AUTH_FAILURE


class HTTPStatusError(OrshotError):
    """Common base for errors derived from an HTTP status code.

    Args:
        message: Human-readable error description.
        status_code: The HTTP status returned by the service.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(HTTPStatusError):
    """Raised on HTTP 401 -- the API key is invalid."""

    exit_code = EXIT_AUTH_FAILURE


class ForbiddenError(HTTPStatusError):
    """Raised on HTTP 403 -- the API key lacks permission for the endpoint."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(HTTPStatusError):
    """Raised on HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class RateLimitedError(HTTPStatusError):
    """Raised on HTTP 429."""

    exit_code = EXIT_RATE_LIMITED


class UpstreamError(HTTPStatusError):
    """Raised for any other non-2xx status returned by the service."""

    exit_code = EXIT_UPSTREAM_ERROR


class NetworkError(OrshotError):
    """Raised when the request never reached the server (DNS, refused, timeout)."""

    exit_code = EXIT_CONNECTION_ERROR


class UnknownError(OrshotError):
    """Raised for local failures while building or sending a request."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(OrshotError):
    """Raised for unreadable or invalid configuration files."""

    exit_code = EXIT_GENERIC_FAILURE


class OutputError(OrshotError):
    """Raised when a rendered asset cannot be written to disk."""

    exit_code = EXIT_GENERIC_FAILURE
