"""Config commands -- view and modify HTTP settings.

Provides the ``orshot config`` sub-command group for reading and updating
the settings file (:class:`~orshot.models.Settings`). Settings control
the request timeout and SSL verification; credentials are managed by
``orshot auth`` instead.
"""

from __future__ import annotations

import typer

from orshot.output import error, info, print_data, print_json, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective settings.

    Environment overrides such as ``ORSHOT_TIMEOUT`` are already applied.

    Example::

        orshot config show
    """
    from orshot.commands import fail
    from orshot.config import resolve_settings, settings_path
    from orshot.exceptions import OrshotError

    try:
        settings = resolve_settings()
    except OrshotError as exc:
        fail("Failed to load settings", exc)

    info(f"Config file: {settings_path()}")
    print_json(settings.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting name, e.g. 'timeout'."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the type of the existing field and the result
    is validated against :class:`~orshot.models.Settings` before saving.

    Raises:
        typer.Exit: With code 2 if the key is unknown or the value invalid.

    Example::

        orshot config set timeout 600
        orshot config set verify_ssl false
    """
    from pydantic import ValidationError

    from orshot.commands import fail
    from orshot.config import load_settings, save_settings
    from orshot.exceptions import OrshotError
    from orshot.models import Settings

    try:
        settings = load_settings()
    except OrshotError as exc:
        fail("Failed to load settings", exc)

    data = settings.model_dump(mode="json")
    if key not in data:
        error(f"Unknown config key: {key}")
        info(f"Known keys: {', '.join(sorted(data))}")
        raise typer.Exit(code=2)

    current = data[key]
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = float(value)
        except ValueError:
            error(f"Expected a number for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        coerced = value
    data[key] = coerced

    try:
        new_settings = Settings.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None
    if new_settings.timeout <= 0:
        error("timeout must be a positive number of seconds")
        raise typer.Exit(code=2)

    save_settings(new_settings)
    success(f"Set {key} = {coerced}")


@config_app.command("path")
def config_path() -> None:
    """Print the configuration directory."""
    from orshot.config import get_config_dir

    print_data(str(get_config_dir()))
