"""Response-shape normalisation for Orshot API payloads.

The service is not consistent about envelopes: some endpoints wrap their
payload in ``{"data": ...}``, others return it at the top level, and render
results carry inline base64, raw bytes or hosted URLs depending on the
requested response type. The helpers here are small pure functions over
untyped payloads; each returns a well-typed value or an explicit fallback.

See Also:
    :class:`~orshot.client.api_client.OrshotClient` -- the only caller of
    :func:`extract_body`, :func:`normalize_user` and :func:`unwrap_list`.
"""

from __future__ import annotations

from typing import Any

import httpx

from orshot.models import UserProfile

_USER_FIELDS = ("user_id", "id", "email", "name", "full_name")


def extract_body(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    JSON content is decoded; binary content types (images, PDFs, video)
    are returned as ``bytes``; anything else as text. Returns ``None`` for
    an empty body.
    """
    if not response.content:
        return None

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text

    if content_type.startswith(("image/", "video/", "application/pdf", "application/octet-stream")):
        return response.content

    # Untyped bodies: JSON if it parses, otherwise text.
    try:
        return response.json()
    except ValueError:
        return response.text


def normalize_user(payload: Any) -> UserProfile:
    """Normalise a ``/v1/me/user_id`` payload into a :class:`UserProfile`.

    Accepts the fields either nested under ``data`` or at the top level,
    with ``user_id``/``id`` and ``name``/``full_name`` as aliases. A payload
    matching neither shape yields the default profile
    (``user_id="Unknown"``), since keys with restricted permissions can
    authenticate without being able to read their own profile.
    """
    if not isinstance(payload, dict):
        return UserProfile()

    source = payload.get("data")
    if not isinstance(source, dict):
        if not any(field in payload for field in _USER_FIELDS):
            return UserProfile()
        source = payload

    user_id = source.get("user_id") or source.get("id")
    name = source.get("name") or source.get("full_name")
    email = source.get("email")
    return UserProfile(
        user_id=str(user_id) if user_id else "Unknown",
        email=str(email) if email else "",
        name=str(name) if name else "",
    )


def unwrap_list(payload: Any) -> list[Any]:
    """Return the list carried by *payload*.

    A bare list is returned unchanged, a ``{"data": [...]}`` envelope is
    unwrapped, and any other shape yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []


def extract_content(result: Any) -> Any:
    """Return the asset content of a render result.

    Probes ``result.data.content`` and falls back to the raw payload, which
    is what ``binary`` responses look like.
    """
    if isinstance(result, dict):
        data = result.get("data")
        if isinstance(data, dict) and data.get("content"):
            return data["content"]
    return result


def extract_url(result: Any) -> Any:
    """Return the hosted URL(s) of a ``url``-type render result.

    Probes ``result.url``, ``result.data.content`` and ``result.data`` in
    that order, falling back to the raw payload. Multi-page renders yield
    a list of URLs.
    """
    if not isinstance(result, dict):
        return result
    if result.get("url"):
        return result["url"]
    data = result.get("data")
    if isinstance(data, dict) and data.get("content"):
        return data["content"]
    if data:
        return data
    return result
