"""Console output for orshot.

Rendered data (template tables, ``--json`` payloads, asset URLs) is written
to stdout so that it can be piped; everything else -- status lines, the
request spinner, warnings, errors, hints and debug traces -- goes to stderr.

Colour is dropped when ``NO_COLOR`` is set, when ``TERM=dumb``, with
``--no-color``, or whenever the stream is not a terminal. Diagnostics are
built as :class:`rich.text.Text` rather than markup strings, so template
names and URLs containing square brackets are printed verbatim.

Commands call the module-level helpers (:func:`info`, :func:`error`,
:func:`print_table`, ...). :func:`orshot.app.main_callback` installs the
configured :class:`OutputManager` with :func:`set_output`.
"""

from __future__ import annotations

import contextlib
import json
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text


class OutputFormat(str, Enum):
    """How tables are drawn on stdout.

    ``AUTO`` picks ``RICH`` for a colour-capable terminal and ``PLAIN``
    (tab-separated values) otherwise.
    """

    AUTO = "auto"
    PLAIN = "plain"
    RICH = "rich"


# level: (prefix, prefix style, message style, shown under --quiet)
_LEVELS: dict[str, tuple[str, str, str, bool]] = {
    "info": ("", "", "", False),
    "success": ("", "green", "green", False),
    "warning": ("Warning: ", "yellow", "", True),
    "error": ("Error: ", "bold red", "", True),
    "suggest": ("→ ", "dim", "dim", False),
    "debug": ("[debug] ", "dim", "dim", False),
}


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Table style for stdout. ``AUTO`` resolves from the terminal.
        no_color: Disable colour even on a terminal.
        quiet: Hide info, success and hint messages. Warnings, errors and
            stdout data are always shown.
        verbose: Show ``debug`` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose

        if format is OutputFormat.AUTO:
            rich_tables = _stdout_is_terminal() and not self._no_color
            format = OutputFormat.RICH if rich_tables else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format is OutputFormat.RICH or None,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, highlight=False)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def no_color(self) -> bool:
        return self._no_color

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def print_data(self, text: str) -> None:
        sys.stdout.write(f"{text}\n")
        sys.stdout.flush()

    def print_json(self, data: Any) -> None:
        """Print *data* as indented JSON.

        Binary render results are summarised as ``{"binary": true, "size": n}``.
        """
        if isinstance(data, bytes):
            data = {"binary": True, "size": len(data)}
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print a table: a rich grid in RICH format, TSV lines in PLAIN."""
        if self._format is OutputFormat.PLAIN:
            for line in (headers, *rows):
                self.print_data("\t".join(line))
            return

        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- stderr ---

    def _emit(self, level: str, message: str) -> None:
        prefix, prefix_style, message_style, survives_quiet = _LEVELS[level]
        if self._quiet and not survives_quiet:
            return
        text = Text.assemble((prefix, prefix_style), (message, message_style))
        self._stderr.print(text, soft_wrap=True)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def suggest(self, message: str) -> None:
        """Print a next-step hint, e.g. the command to run after a failure."""
        self._emit("suggest", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit("debug", message)

    @contextlib.contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Show a spinner on stderr while the block runs.

        Only drawn on an interactive, coloured, non-quiet stderr.
        """
        if self._quiet or self._no_color or not self._stderr.is_terminal:
            yield
            return
        with self._stderr.status(message):
            yield


def _stdout_is_terminal() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _color_disabled_by_env() -> bool:
    """``NO_COLOR`` set to any value, or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager. Tests call this between runs because a
    manager holds on to the streams that were current when it was built."""
    global _output
    _output = None


# --- helpers bound to the global instance ---


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_json(data: Any) -> None:
    get_output().print_json(data)


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
