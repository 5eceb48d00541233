"""Mapping from flat CLI render options to render request bodies.

The ``generate`` commands collect a flat set of knobs (format, response type,
scale, pages, dpi, quality, video flags, webhook). :func:`build_studio_request`
folds them into the nested studio body, attaching ``pdfOptions`` only for PDF
output and ``videoOptions`` only for video output.
:func:`build_library_request` produces the simpler library body, which only
carries format and response type.

Also provides the parsers for repeated ``key=value`` modification flags and
``--pages`` page lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from orshot.exceptions import InvalidUsageError
from orshot.models import (
    LibraryRenderRequest,
    PdfOptions,
    ResponseOptions,
    StudioRenderRequest,
    VideoOptions,
)

LIBRARY_FORMATS = ("png", "jpg", "jpeg", "webp", "pdf")
STUDIO_FORMATS = ("png", "jpg", "jpeg", "webp", "pdf", "mp4", "webm", "gif")
RESPONSE_TYPES = ("base64", "binary", "url")

PDF_FORMATS = frozenset({"pdf"})
VIDEO_FORMATS = frozenset({"mp4", "webm", "gif"})
QUALITY_IMAGE_FORMATS = frozenset({"jpg", "jpeg", "webp"})


@dataclass
class RenderOptions:
    """Flat render knobs as collected from the command line."""

    format: str = "png"
    response_type: str = "base64"
    scale: Optional[float] = None
    pages: Optional[list[int]] = None
    dpi: Optional[int] = None
    quality: Optional[int] = None
    loop: bool = False
    muted: bool = False
    trim_start: Optional[float] = None
    trim_end: Optional[float] = None
    webhook: Optional[str] = None


def parse_modifications(entries: Optional[Iterable[str]]) -> dict[str, str]:
    """Parse repeated ``key=value`` flags into a dict.

    Only the first ``=`` separates key from value, so ``"b=2=3"`` yields
    ``{"b": "2=3"}``. Entries without ``=`` or with an empty key are
    ignored.
    """
    modifications: dict[str, str] = {}
    for entry in entries or ():
        key, sep, value = entry.partition("=")
        if key and sep:
            modifications[key] = value
    return modifications


def parse_pages(value: Optional[str]) -> Optional[list[int]]:
    """Parse a page selection such as ``"1,3-5"`` into ``[1, 3, 4, 5]``.

    Raises:
        InvalidUsageError: On non-numeric parts, pages below 1 or
            descending ranges.
    """
    if value is None or not value.strip():
        return None

    pages: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        start_str, sep, end_str = part.partition("-")
        try:
            start = int(start_str)
            end = int(end_str) if sep else start
        except ValueError:
            raise InvalidUsageError(f"Invalid page selection: {part!r}") from None
        if start < 1 or end < start:
            raise InvalidUsageError(f"Invalid page range: {part!r}")
        pages.extend(range(start, end + 1))
    return pages or None


def build_library_request(
    template_id: str,
    modifications: dict[str, str],
    options: RenderOptions,
) -> LibraryRenderRequest:
    """Build the body for ``POST /v1/generate/images``.

    Only format and response type are sent; the library endpoint does not
    receive ``quality``.
    """
    return LibraryRenderRequest(
        template_id=template_id,
        modifications=dict(modifications),
        response=ResponseOptions(format=options.format, type=options.response_type),
    )


def build_studio_request(
    template_id: str,
    modifications: dict[str, str],
    options: RenderOptions,
) -> StudioRenderRequest:
    """Build the body for ``POST /v1/studio/render``.

    ``response.quality`` is set for JPEG/WebP output, ``pdfOptions`` when the
    format is PDF and a dpi was given, and ``videoOptions`` for every video
    format whether or not any video flag was passed.
    """
    fmt = options.format
    response = ResponseOptions(
        format=fmt,
        type=options.response_type,
        scale=options.scale,
        include_pages=options.pages or None,
        quality=options.quality if fmt in QUALITY_IMAGE_FORMATS else None,
    )

    request = StudioRenderRequest(
        template_id=template_id,
        modifications=dict(modifications),
        response=response,
    )

    if fmt in PDF_FORMATS and options.dpi is not None:
        request.pdf_options = PdfOptions(dpi=options.dpi)

    if fmt in VIDEO_FORMATS:
        request.video_options = VideoOptions(
            loop=options.loop,
            muted=options.muted,
            trim_start=options.trim_start,
            trim_end=options.trim_end,
            quality=options.quality,
        )

    if options.webhook:
        request.webhook = options.webhook

    return request
