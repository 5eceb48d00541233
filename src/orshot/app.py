"""Root Typer application and the ``orshot`` console-script entry point.

Command groups are registered here (``auth``, ``templates``, ``generate``,
``config``) together with the stand-alone ``test`` command. The root
callback turns the global flags into the process-wide
:class:`~orshot.output.OutputManager`.

:func:`main` is what ``pyproject.toml`` points the console script at. It
maps Ctrl-C to exit status 130, turns a stray
:class:`~orshot.exceptions.OrshotError` into its exit code, and writes any
other exception to a crash log under the data directory.
"""

from __future__ import annotations

import os
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from orshot import __version__
from orshot.commands.auth import auth_app
from orshot.commands.config import config_app
from orshot.commands.generate import generate_app
from orshot.commands.ping import connectivity_test
from orshot.commands.templates import templates_app
from orshot.exit_codes import EXIT_GENERIC_FAILURE

_EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="orshot",
    help="CLI for Orshot - automated image, PDF and video generation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    epilog=(
        "Examples:\n\n"
        "  orshot auth login <api-key>\n\n"
        "  orshot templates studio\n\n"
        "  orshot generate studio <id> -m title=Hello -f pdf --dpi 300\n\n"
        "Documentation: https://orshot.com/docs"
    ),
)

app.add_typer(auth_app, name="auth", help="Log in, log out and show the current account.")
app.add_typer(templates_app, name="templates", help="List templates and their modifications.")
app.add_typer(generate_app, name="generate", help="Render library and studio templates.")
app.add_typer(config_app, name="config", help="View and change HTTP settings.")
app.command("test")(connectivity_test)


def _show_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"orshot {__version__}")
    raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        is_eager=True,
        callback=_show_version,
        help="Print the version and exit.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Plain, uncoloured output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data, warnings and errors."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print request and response details to stderr."
    ),
) -> None:
    """Install the output manager for this invocation.

    ``ORSHOT_DEBUG`` in the environment turns on ``--verbose``.
    """
    from orshot.config import debug_enabled
    from orshot.output import OutputManager, set_output

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose or debug_enabled())
    set_output(output)
    ctx.obj = output


def _on_interrupt(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(_EXIT_INTERRUPTED)


def _write_crash_log(exc: BaseException) -> Path:
    """Save the traceback of *exc* under ``<data_dir>/logs`` and return the file."""
    from orshot.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{stamp}-{os.getpid()}.log"
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    log_path.write_text(f"orshot {__version__}\n\n" + "".join(lines), encoding="utf-8")
    return log_path


def main() -> None:
    """Run the CLI and exit with its status code."""
    from orshot.exceptions import OrshotError
    from orshot.output import error

    signal.signal(signal.SIGINT, _on_interrupt)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        _on_interrupt(signal.SIGINT, None)
    except OrshotError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
