"""CUE show command: print the FILE / TRACK / INDEX layout of a cue sheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from cue_commander.cli import Context, pass_context
from cue_commander.commands.cue import EXIT_CUE_ERROR, cli, read_sheet_or_exit
from cue_commander.cue.models import FileEntry
from cue_commander.cue.timestamp import bytes_to_timestamp
from cue_commander.exceptions import CueError
from cue_commander.utils.output import console, create_table, error, info


def _file_table(file_entry: FileEntry) -> Table:
    table = create_table(
        title=f"[cue.file]{escape(file_entry.filename)}[/cue.file]  "
        f"[cue.kind]{file_entry.kind.text}[/cue.kind]",
        title_justify="left",
    )
    table.add_column("Track", justify="right")
    table.add_column("Type")
    table.add_column("Index", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Timestamp", style="cue.timestamp")

    for track in file_entry.tracks:
        if not track.indexes:
            table.add_row(f"{track.id:02d}", track.kind.text, "", "", "")
            continue
        for position, index in enumerate(track.indexes):
            # Only the first row of a track carries its number and type
            first = position == 0
            table.add_row(
                f"{track.id:02d}" if first else "",
                track.kind.text if first else "",
                f"{index.id:02d}",
                str(index.byte_offset),
                bytes_to_timestamp(index.byte_offset),
            )
    return table


@cli.command("show")
@click.argument("cue_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_context
def show(ctx: Context, cue_file: Path) -> None:
    """Show the FILE, TRACK and INDEX records of CUE_FILE.

    Each FILE is printed as a table listing its tracks, their indexes,
    and every index position both in bytes and as an MM:SS:FF timestamp.
    """
    config = ctx.get_config()
    sheet = read_sheet_or_exit(cue_file, config)

    try:
        # Offsets past 99:59:74 parse through carry-over but have no timestamp
        tables = [_file_table(file_entry) for file_entry in sheet.files]
    except CueError as e:
        error(escape(f"{cue_file.name}: {e}"))
        sys.exit(EXIT_CUE_ERROR)

    for table in tables:
        console.print(table)

    info(f"{len(sheet.files)} file(s), {sheet.track_count} track(s)")
