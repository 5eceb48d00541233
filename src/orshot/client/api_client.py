"""Synchronous HTTP client for the Orshot API.

This module provides :class:`OrshotClient`, the single point of contact with
the remote service. It wraps :class:`httpx.Client` and layers on:

- **Auth injection** -- the stored API key becomes a bearer token on every
  request; a missing key fails before any traffic is sent.
- **Long timeouts** -- studio renders can include video encoding, so the
  default timeout is minutes rather than seconds.
- **Error classification** -- every failure surfaces as exactly one
  :class:`~orshot.exceptions.OrshotError` subclass with a human-readable
  message.

There is no retry: each command performs at most one attempt per request.
"""

from __future__ import annotations

import contextlib
from typing import Any, Optional

import httpx

from orshot import __version__
from orshot.auth.credential_store import CredentialStore
from orshot.client.response import extract_body, normalize_user, unwrap_list
from orshot.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    UnknownError,
    UpstreamError,
)
from orshot.models import Settings, UserProfile
from orshot.output import get_output
from orshot.render import RenderOptions, build_library_request, build_studio_request

USER_AGENT = f"orshot-cli/{__version__}"


class OrshotClient:
    """Blocking client for the Orshot API.

    Must be used as a context manager so that the underlying transport is
    opened and closed properly.

    Args:
        store: Credential store supplying the API key and domain.
        settings: HTTP settings (timeout, SSL verification). Defaults to
            :class:`~orshot.models.Settings`.
        transport: Optional httpx transport, used by tests to stub the
            network.

    Example::

        with OrshotClient(CredentialStore()) as client:
            templates = client.get_studio_templates()
    """

    def __init__(
        self,
        store: CredentialStore,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> OrshotClient:
        self._client = httpx.Client(
            timeout=self._settings.timeout,
            verify=self._settings.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    @property
    def base_url(self) -> str:
        return self._store.get_domain().rstrip("/")

    # ------------------------------------------------------------------ #
    # Core request
    # ------------------------------------------------------------------ #

    def get_headers(self) -> dict[str, str]:
        """Return the headers sent with every request.

        Raises:
            AuthenticationError: If no API key is stored.
        """
        api_key = self._store.get_api_key()
        if not api_key:
            raise AuthenticationError("No API key found. Please authenticate first.")
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def request(
        self,
        method: str,
        endpoint: str,
        json_body: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        show_spinner: bool = False,
    ) -> Any:
        """Send one request to ``domain + endpoint`` and return the parsed body.

        Args:
            method: HTTP method.
            endpoint: Path beginning with ``/``.
            json_body: JSON-serialisable request body.
            params: Query parameters.
            show_spinner: Draw a spinner on stderr while waiting.

        Returns:
            The decoded body of a 2xx response (see
            :func:`~orshot.client.response.extract_body`).

        Raises:
            AuthenticationError: No API key stored.
            UnauthorizedError: HTTP 401.
            ForbiddenError: HTTP 403.
            NotFoundError: HTTP 404.
            RateLimitedError: HTTP 429.
            UpstreamError: Any other non-2xx status.
            NetworkError: The server could not be reached.
            UnknownError: Any other local failure.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        headers = self.get_headers()
        url = f"{self.base_url}{endpoint}"
        output = get_output()
        output.debug(f"{method.upper()} {url}")

        spinner = output.status("Making request...") if show_spinner else contextlib.nullcontext()
        with spinner:
            try:
                response = self._client.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    json=json_body,
                )
            except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
                output.debug(f"Network failure: {exc!r}")
                raise NetworkError("Network error. Please check your connection.") from exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise UnknownError(str(exc) or "Unknown error occurred") from exc

        output.debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
        self._raise_for_status(response)
        return extract_body(response)

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise a classified exception for any non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return

        if status == 401:
            raise UnauthorizedError("Invalid API key. Please check your credentials.", status)
        if status == 403:
            raise ForbiddenError("Access forbidden. Check your API key permissions.", status)
        if status == 404:
            raise NotFoundError("Resource not found.", status)
        if status == 429:
            raise RateLimitedError("Rate limit exceeded. Please try again later.", status)

        message = ""
        try:
            detail = response.json()
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            message = detail.get("error") or detail.get("message") or ""
        raise UpstreamError(str(message) if message else f"HTTP {status} error", status)

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    def get_current_user(self) -> UserProfile:
        payload = self.request("GET", "/v1/me/user_id", show_spinner=True)
        return normalize_user(payload)

    def get_library_templates(self) -> list[Any]:
        return unwrap_list(self.request("GET", "/v1/templates", show_spinner=True))

    def get_studio_templates(self) -> list[Any]:
        return unwrap_list(self.request("GET", "/v1/studio/templates", show_spinner=True))

    def get_library_template_modifications(self, template_id: str) -> list[Any]:
        payload = self.request(
            "GET",
            "/v1/templates/modifications",
            params={"template_id": template_id},
            show_spinner=True,
        )
        return unwrap_list(payload)

    def get_studio_template_modifications(self, template_id: str) -> list[Any]:
        # The studio endpoint spells the parameter ``templateId``.
        payload = self.request(
            "GET",
            "/v1/studio/template/modifications",
            params={"templateId": template_id},
            show_spinner=True,
        )
        return unwrap_list(payload)

    def generate_from_library(
        self,
        template_id: str,
        modifications: dict[str, str],
        options: RenderOptions,
    ) -> Any:
        body = build_library_request(template_id, modifications, options).to_body()
        return self.request("POST", "/v1/generate/images", json_body=body, show_spinner=True)

    def generate_from_studio(
        self,
        template_id: str,
        modifications: dict[str, str],
        options: RenderOptions,
    ) -> Any:
        body = build_studio_request(template_id, modifications, options).to_body()
        return self.request("POST", "/v1/studio/render", json_body=body, show_spinner=True)
