"""Template commands -- browse library and studio templates.

Provides the ``orshot templates`` sub-command group::

    orshot templates library --limit 5
    orshot templates studio --json
    orshot templates modifications <template-id> --type studio
"""

from __future__ import annotations

from typing import Any

import typer

from orshot.output import get_output, info, print_json, print_table, suggest


templates_app = typer.Typer(no_args_is_help=True)

TEMPLATE_KINDS = ("library", "studio")


@templates_app.command("library")
def templates_library(
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Limit number of results."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List library templates."""
    _list_templates("library", limit, as_json)


@templates_app.command("studio")
def templates_studio(
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Limit number of results."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List studio templates."""
    _list_templates("studio", limit, as_json)


@templates_app.command("modifications")
def templates_modifications(
    template_id: str = typer.Argument(help="Template ID."),
    kind: str = typer.Option("library", "--type", "-t", help="Template type: library or studio."),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """Show the modifications a template accepts.

    Example::

        orshot templates modifications 42
        orshot templates modifications tpl_abc --type studio
    """
    from orshot.auth import CredentialStore, require_auth
    from orshot.client import create_client
    from orshot.commands import fail
    from orshot.exceptions import OrshotError
    from orshot.models import ModificationSpec

    if kind not in TEMPLATE_KINDS:
        get_output().error(f"Template type must be one of: {', '.join(TEMPLATE_KINDS)}")
        raise typer.Exit(code=2)

    store = CredentialStore()
    require_auth(store)

    try:
        with create_client(store) as client:
            if kind == "studio":
                modifications = client.get_studio_template_modifications(template_id)
            else:
                modifications = client.get_library_template_modifications(template_id)
    except OrshotError as exc:
        fail(
            "Failed to fetch template modifications",
            exc,
            domain=store.get_domain(),
            hint="Make sure the template ID is correct and you have access to it",
        )

    if as_json:
        print_json(modifications)
        return

    if not modifications:
        info(f"No modifications found for {kind} template: {template_id}")
        return

    rows: list[list[str]] = []
    for index, raw in enumerate(modifications, 1):
        spec = ModificationSpec.model_validate(raw) if isinstance(raw, dict) else ModificationSpec(key=str(raw))
        rows.append([str(index), spec.field_name, spec.type or "-", spec.description or "-"])

    print_table(
        ["#", "Name", "Type", "Description"],
        rows,
        title=f"Modifications for {kind} template {template_id}",
    )


def _list_templates(kind: str, limit: int, as_json: bool) -> None:
    """Fetch and print library or studio templates."""
    from orshot.auth import CredentialStore, require_auth
    from orshot.client import create_client
    from orshot.commands import fail
    from orshot.exceptions import OrshotError

    store = CredentialStore()
    require_auth(store)

    try:
        with create_client(store) as client:
            if kind == "studio":
                templates = client.get_studio_templates()
            else:
                templates = client.get_library_templates()
    except OrshotError as exc:
        fail(f"Failed to fetch {kind} templates", exc, domain=store.get_domain())

    if as_json:
        print_json(templates)
        return

    if not templates:
        info(f"No {kind} templates found")
        return

    rows = [_template_row(index, raw) for index, raw in enumerate(templates[:limit], 1)]
    print_table(
        ["#", "ID", "Name", "Description", "Modifications"],
        rows,
        title=f"{kind.title()} Templates ({len(templates)})",
    )

    if len(templates) > limit:
        info(f"... and {len(templates) - limit} more templates")
        suggest(f"Use --limit {len(templates)} to see all templates")


def _template_row(index: int, raw: Any) -> list[str]:
    from orshot.models import Template

    template = Template.model_validate(raw) if isinstance(raw, dict) else Template(id=raw)
    modification_count = len(template.modifications) if template.modifications else 0
    return [
        str(index),
        str(template.id),
        template.display_name,
        template.description or "",
        f"{modification_count} available" if modification_count else "",
    ]
