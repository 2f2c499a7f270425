"""Rich console output helpers for cue-commander.

Regular output goes to stdout, diagnostics (warnings, errors, debug
lines) to stderr. Log records from the ``cue_commander`` package are
routed through the same helpers by :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "cue.file": "bold",
        "cue.kind": "magenta",
        "cue.timestamp": "green",
    }
)

console = Console(theme=THEME)
error_console = Console(theme=THEME, stderr=True)


@dataclass
class _OutputSettings:
    verbose: bool = False
    debug: bool = False


_settings = _OutputSettings()


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Set what :func:`verbose` and :func:`debug` print. Debug implies verbose."""
    _settings.verbose = verbose or debug
    _settings.debug = debug


def set_color(enabled: bool) -> None:
    for target in (console, error_console):
        target.no_color = not enabled


def _emit(target: Console, label: str, style: str, message: str) -> None:
    target.print(f"[{style}]{label}[/{style}] {message}")


def info(message: str) -> None:
    console.print(f"[info]{message}[/info]")


def success(message: str) -> None:
    console.print(f"[success]{message}[/success]")


def verbose(message: str) -> None:
    """Print *message* only with --verbose or --debug."""
    if _settings.verbose:
        info(message)


def warning(message: str) -> None:
    _emit(error_console, "Warning:", "warning", message)


def error(message: str, hint: str | None = None) -> None:
    """Print an error, optionally followed by a hint on how to fix it."""
    _emit(error_console, "Error:", "error", message)
    if hint is not None:
        _emit(error_console, "  Hint:", "info", hint)


def debug(message: str) -> None:
    if _settings.debug:
        _emit(error_console, "\\[debug]", "warning", message)


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a table with the project's default look."""
    kwargs.setdefault("header_style", "bold")
    return Table(title=title, **kwargs)


class ConsoleLogHandler(logging.Handler):
    """Send log records to the console helpers above.

    Warnings from the cue package (unknown kinds, unrecognised lines)
    end up on stderr next to the rest of the CLI output.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = escape(self.format(record))
        except Exception:
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            error(message)
        elif record.levelno >= logging.WARNING:
            warning(message)
        else:
            debug(message)


def configure_logging(*, quiet: bool = False) -> None:
    """Route ``cue_commander`` log records through the console.

    Debug records are shown only with --debug; --quiet keeps errors only.
    """
    logger = logging.getLogger("cue_commander")
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleLogHandler):
            logger.removeHandler(handler)

    handler = ConsoleLogHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    if quiet:
        handler.setLevel(logging.ERROR)
    elif _settings.debug:
        handler.setLevel(logging.DEBUG)
    else:
        handler.setLevel(logging.WARNING)
    logger.addHandler(handler)

    # Debug records are dropped at the logger unless asked for
    logger.setLevel(logging.DEBUG if _settings.debug else logging.NOTSET)
