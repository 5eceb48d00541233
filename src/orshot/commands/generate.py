"""Generate commands -- render library and studio templates.

Provides the ``orshot generate`` sub-command group. Both commands accept
repeated ``-m key=value`` modifications, an optional interactive mode that
prompts for every field the template declares, and a response type that
decides whether the asset is saved to disk (``base64``, ``binary``) or its
hosted URL printed (``url``).

Studio renders add PDF, video and multi-page knobs, and may hand the result
to a webhook instead of returning it::

    orshot generate library 42 -m title="Launch day" -f jpg -o banner.jpg
    orshot generate studio tpl_abc -f pdf --dpi 300 --pages 1-3
    orshot generate studio tpl_abc -f mp4 --loop --trim-end 4.5
    orshot generate studio tpl_abc -w https://example.com/hooks/render
"""

from __future__ import annotations

import base64
import binascii
import re
import time
from pathlib import Path
from typing import Any, Optional

import typer

from orshot.exceptions import OrshotError, OutputError
from orshot.output import get_output, info, print_data, print_json, success, warning
from orshot.render import (
    LIBRARY_FORMATS,
    RESPONSE_TYPES,
    STUDIO_FORMATS,
    RenderOptions,
    parse_modifications,
    parse_pages,
)


generate_app = typer.Typer(no_args_is_help=True)

_DATA_URL_PREFIX = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,")


@generate_app.command("library")
def generate_library(
    template_id: str = typer.Argument(help="Library template ID."),
    modification: Optional[list[str]] = typer.Option(
        None, "--modification", "-m", help="Template modification key=value (repeatable)."
    ),
    fmt: str = typer.Option("png", "--format", "-f", help="Output format: png, jpg, jpeg, webp, pdf."),
    response_type: str = typer.Option("base64", "--type", "-t", help="Response type: base64, binary, url."),
    output_file: Optional[str] = typer.Option(None, "--output", "-o", help="Output filename."),
    quality: Optional[int] = typer.Option(
        None, "--quality", min=1, max=100, help="Image quality for jpg/webp (1-100)."
    ),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Prompt for each modification."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output the raw response as JSON."),
) -> None:
    """Generate an image from a library template."""
    fmt = _check_choice("format", fmt, LIBRARY_FORMATS)
    response_type = _check_choice("response type", response_type, RESPONSE_TYPES)
    options = RenderOptions(format=fmt, response_type=response_type, quality=quality)
    _generate("library", template_id, modification, options, output_file, interactive, as_json)


@generate_app.command("studio")
def generate_studio(
    template_id: str = typer.Argument(help="Studio template ID."),
    modification: Optional[list[str]] = typer.Option(
        None,
        "--modification",
        "-m",
        "--data",
        "-d",
        help="Template modification key=value (repeatable).",
    ),
    fmt: str = typer.Option(
        "png", "--format", "-f", help="Output format: png, jpg, jpeg, webp, pdf, mp4, webm, gif."
    ),
    response_type: str = typer.Option("base64", "--type", "-t", help="Response type: base64, binary, url."),
    output_file: Optional[str] = typer.Option(None, "--output", "-o", help="Output filename."),
    scale: Optional[float] = typer.Option(None, "--scale", min=0.1, help="Render scale factor."),
    pages: Optional[str] = typer.Option(None, "--pages", help="Pages to include, e.g. 1,3-5."),
    dpi: Optional[int] = typer.Option(None, "--dpi", min=1, help="PDF resolution."),
    quality: Optional[int] = typer.Option(
        None, "--quality", min=1, max=100, help="Quality for jpg/webp and video output (1-100)."
    ),
    loop: bool = typer.Option(False, "--loop", help="Loop video output."),
    muted: bool = typer.Option(False, "--muted", help="Strip audio from video output."),
    trim_start: Optional[float] = typer.Option(None, "--trim-start", min=0, help="Video start time in seconds."),
    trim_end: Optional[float] = typer.Option(None, "--trim-end", min=0, help="Video end time in seconds."),
    webhook: Optional[str] = typer.Option(
        None, "--webhook", "-w", help="Deliver the result to this URL instead of returning it."
    ),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Prompt for each modification."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output the raw response as JSON."),
) -> None:
    """Render a studio template to an image, PDF or video."""
    from orshot.commands import fail

    fmt = _check_choice("format", fmt, STUDIO_FORMATS)
    response_type = _check_choice("response type", response_type, RESPONSE_TYPES)
    try:
        page_list = parse_pages(pages)
    except OrshotError as exc:
        fail("Invalid --pages", exc)

    options = RenderOptions(
        format=fmt,
        response_type=response_type,
        scale=scale,
        pages=page_list,
        dpi=dpi,
        quality=quality,
        loop=loop,
        muted=muted,
        trim_start=trim_start,
        trim_end=trim_end,
        webhook=webhook,
    )
    _generate("studio", template_id, modification, options, output_file, interactive, as_json)


# ---------------------------------------------------------------------------
# Shared flow
# ---------------------------------------------------------------------------


def _generate(
    kind: str,
    template_id: str,
    entries: Optional[list[str]],
    options: RenderOptions,
    output_file: Optional[str],
    interactive: bool,
    as_json: bool,
) -> None:
    """Collect modifications, submit the render and deliver the result."""
    from orshot.auth import CredentialStore, require_auth
    from orshot.client import create_client
    from orshot.client.response import extract_content, extract_url
    from orshot.commands import fail

    store = CredentialStore()
    require_auth(store)

    modifications = parse_modifications(entries)

    try:
        with create_client(store) as client:
            if interactive:
                modifications = _prompt_modifications(client, kind, template_id, modifications)

            info(f"Rendering {kind} template {template_id}...")
            if kind == "studio":
                result = client.generate_from_studio(template_id, modifications, options)
            else:
                result = client.generate_from_library(template_id, modifications, options)
    except OrshotError as exc:
        fail("Failed to generate", exc, domain=store.get_domain())

    if as_json:
        print_json(result)
        return

    if options.webhook:
        success("Render request accepted.")
        info(f"Result will be delivered to webhook: {options.webhook}")
        _print_modifications(modifications)
        return

    success("Generated successfully!")

    if options.response_type == "url":
        urls = extract_url(result)
        for url in urls if isinstance(urls, list) else [urls]:
            print_data(str(url))
    else:
        content = extract_content(result) if options.response_type == "base64" else result
        target = Path(output_file or default_filename(kind, template_id, options.format))
        try:
            saved = write_asset(content, target, options.response_type)
        except OutputError as exc:
            fail("Failed to save output", exc)
        for path in saved:
            success(f"Saved as: {path}")

    _print_modifications(modifications)


def _prompt_modifications(
    client: Any,
    kind: str,
    template_id: str,
    modifications: dict[str, str],
) -> dict[str, str]:
    """Prompt for every modification the template declares.

    Values given on the command line become the prompt defaults. A failure
    to fetch the modification list is reported as a warning and the
    command-line values are kept.
    """
    from orshot.models import ModificationSpec

    info("Fetching available modifications...")
    try:
        if kind == "studio":
            available = client.get_studio_template_modifications(template_id)
        else:
            available = client.get_library_template_modifications(template_id)
    except OrshotError as exc:
        warning(f"Could not fetch modifications ({exc}), continuing with provided values")
        return modifications

    if not available:
        warning("No modifications available for this template")
        return modifications

    merged = dict(modifications)
    for raw in available:
        if not isinstance(raw, dict):
            continue
        spec = ModificationSpec.model_validate(raw)
        name = spec.field_name
        if not name:
            continue
        answer = typer.prompt(
            spec.description or name,
            default=merged.get(name, ""),
            show_default=bool(merged.get(name)),
        )
        if answer.strip():
            merged[name] = answer.strip()
    return merged


def _print_modifications(modifications: dict[str, str]) -> None:
    if not modifications:
        return
    info("Used modifications:")
    for key, value in modifications.items():
        info(f"  {key}: {value}")


def _check_choice(label: str, value: str, choices: tuple[str, ...]) -> str:
    normalized = value.lower()
    if normalized not in choices:
        get_output().error(f"Invalid {label} {value!r}. Choose from: {', '.join(choices)}")
        raise typer.Exit(code=2)
    return normalized


# ---------------------------------------------------------------------------
# Saving results
# ---------------------------------------------------------------------------


def default_filename(kind: str, template_id: str, fmt: str) -> str:
    """Return ``orshot-<id>-<ms>.<fmt>`` (library) or ``orshot-studio-<id>-<ms>.<fmt>``."""
    prefix = "orshot-studio" if kind == "studio" else "orshot"
    return f"{prefix}-{template_id}-{int(time.time() * 1000)}.{fmt}"


def write_asset(content: Any, target: Path, response_type: str) -> list[Path]:
    """Write rendered content to *target* and return the paths written.

    ``base64`` content is decoded (a ``data:`` URL prefix is stripped first);
    ``binary`` content is written as-is. A list of items -- one per page of
    a multi-page render -- is written to ``<stem>-1<suffix>``,
    ``<stem>-2<suffix>`` and so on.

    Raises:
        OutputError: If the content is not decodable or a file cannot be
            written.
    """
    items = content if isinstance(content, list) else [content]
    if not items:
        raise OutputError("The response did not contain any content to save")

    if len(items) == 1:
        targets = [target]
    else:
        targets = [
            target.with_name(f"{target.stem}-{page}{target.suffix}")
            for page in range(1, len(items) + 1)
        ]

    written: list[Path] = []
    for item, path in zip(items, targets):
        data = _decode_base64(item) if response_type == "base64" else _as_bytes(item)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise OutputError(f"Cannot write {path}: {exc}") from exc
        written.append(path)
    return written


def _decode_base64(item: Any) -> bytes:
    if not isinstance(item, str):
        raise OutputError("Expected base64 content in the response; use --json to inspect it")
    payload = "".join(_DATA_URL_PREFIX.sub("", item.strip()).split())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise OutputError(f"Response content is not valid base64: {exc}") from exc


def _as_bytes(item: Any) -> bytes:
    if isinstance(item, bytes):
        return item
    if isinstance(item, str):
        return item.encode("utf-8")
    raise OutputError("Expected binary content in the response; use --json to inspect it")
