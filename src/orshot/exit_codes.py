"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~orshot.exceptions.OrshotError` subclass.
Shell scripts can inspect the exit code to tell a rejected API key from a
network outage without parsing stderr.

Example::

    $ orshot templates library
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the API key was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""No API key is stored, or the service rejected it (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested template or endpoint was not found (HTTP 404)."""

EXIT_UPSTREAM_ERROR = 5
"""The service answered with an unexpected non-2xx status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_RATE_LIMITED = 7
"""The service throttled the request (HTTP 429)."""
