"""CUE msf command: convert between byte offsets and MM:SS:FF timestamps."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from cue_commander.commands.cue import EXIT_CUE_ERROR, cli
from cue_commander.cue.timestamp import bytes_to_timestamp, timestamp_to_bytes
from cue_commander.exceptions import CueError
from cue_commander.utils.output import error


@cli.command("msf")
@click.argument("value")
def msf(value: str) -> None:
    """Convert VALUE between a byte offset and an MM:SS:FF timestamp.

    A VALUE containing ':' is read as a timestamp and printed as bytes;
    anything else is read as a byte offset and printed as a timestamp.
    Offsets start at 00:00:00 (no 2 second lead-in).

    Examples:

    \b
      cue-commander cue msf 00:02:00    # -> 352800
      cue-commander cue msf 352800      # -> 00:02:00
    """
    try:
        if ":" in value:
            click.echo(timestamp_to_bytes(value))
        else:
            click.echo(bytes_to_timestamp(int(value)))
    except ValueError:
        error(f"Not a byte offset or MM:SS:FF timestamp: {escape(value)}")
        sys.exit(EXIT_CUE_ERROR)
    except CueError as e:
        error(escape(str(e)))
        sys.exit(EXIT_CUE_ERROR)
