"""CUE sheet commands."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape

from cue_commander.config import Config
from cue_commander.cue.models import CueSheet
from cue_commander.cue.parser import read_cue
from cue_commander.exceptions import CueError, CueIOError
from cue_commander.utils.output import error

# Exit codes
EXIT_SUCCESS = 0
EXIT_CUE_ERROR = 1
EXIT_IO_ERROR = 2


@click.group("cue")
def cli() -> None:
    """CUE sheet commands.

    Commands for inspecting and combining the FILE / TRACK / INDEX
    layout of disc image cue sheets.
    """
    pass


def read_sheet_or_exit(cue_path: Path, config: Config) -> CueSheet:
    """Read *cue_path* with the configured settings, exiting on failure."""
    try:
        return read_cue(
            cue_path, config.strictness, max_bytes=config.max_bytes, encoding=config.encoding
        )
    except CueIOError as e:
        error(escape(str(e)))
        sys.exit(EXIT_IO_ERROR)
    except CueError as e:
        error(escape(f"{cue_path.name}: {e}"))
        sys.exit(EXIT_CUE_ERROR)


# Import submodules to register their commands with the cli group
from cue_commander.commands.cue import combine as _combine  # noqa: E402, F401
from cue_commander.commands.cue import msf as _msf  # noqa: E402, F401
from cue_commander.commands.cue import show as _show  # noqa: E402, F401
