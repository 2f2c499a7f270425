"""CUE combine command: merge a multi-FILE cue sheet into a single FILE."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape

from cue_commander.cli import Context, pass_context
from cue_commander.commands.cue import (
    EXIT_CUE_ERROR,
    EXIT_IO_ERROR,
    EXIT_SUCCESS,
    cli,
    read_sheet_or_exit,
)
from cue_commander.cue.combiner import combine_files, offsets_from_sizes
from cue_commander.cue.models import CueSheet
from cue_commander.cue.parser import validate_cue_filename
from cue_commander.cue.timestamp import SECTOR_SIZE
from cue_commander.cue.writer import render_cue, write_cue
from cue_commander.exceptions import CueError, CueIOError
from cue_commander.utils.output import error, info, success, verbose


def _source_sizes(sheet: CueSheet, directory: Path) -> list[int]:
    """Return the size of every FILE referenced by *sheet*.

    FILE names are resolved relative to *directory*. Exits if a file is
    missing or is not a whole number of sectors.
    """
    sizes: list[int] = []
    for file_entry in sheet.files:
        source = directory / file_entry.filename
        if not source.is_file():
            error(f"Source file not found: {escape(str(source))}")
            sys.exit(EXIT_IO_ERROR)

        size = source.stat().st_size
        if size % SECTOR_SIZE != 0:
            error(
                f"{escape(source.name)} is {size} bytes, not a whole number of "
                f"{SECTOR_SIZE} byte sectors"
            )
            sys.exit(EXIT_CUE_ERROR)
        sizes.append(size)
    return sizes


@cli.command("combine")
@click.argument("cue_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_cue", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--bin-name",
    type=str,
    default=None,
    help="FILE name written into the combined sheet (default: OUTPUT_CUE with a .bin suffix).",
)
@click.option(
    "--force", "-f", is_flag=True, default=False, help="Overwrite OUTPUT_CUE if it exists."
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    default=False,
    help="Print the combined cue sheet instead of writing it.",
)
@pass_context
def combine(
    ctx: Context,
    cue_file: Path,
    output_cue: Path,
    bin_name: str | None,
    force: bool,
    dry_run: bool,
) -> None:
    """Combine every FILE of CUE_FILE into a single FILE.

    The referenced files are assumed to be concatenated, in sheet order,
    into one binary. Every INDEX is moved by the size of the files that
    precede its own, and the result is written to OUTPUT_CUE. The binary
    itself is not created: concatenate the source files in the listed
    order to produce it.
    """
    config = ctx.get_config()

    try:
        validate_cue_filename(output_cue)
    except CueIOError as e:
        error(escape(str(e)))
        sys.exit(EXIT_IO_ERROR)

    if output_cue.exists() and not force and not dry_run:
        error(
            f"Output file already exists: {escape(str(output_cue))}",
            hint="Use --force to overwrite",
        )
        sys.exit(EXIT_CUE_ERROR)

    sheet = read_sheet_or_exit(cue_file, config)
    if not sheet.files:
        error(f"No FILE entries in {escape(cue_file.name)}")
        sys.exit(EXIT_CUE_ERROR)

    sizes = _source_sizes(sheet, cue_file.parent)
    offsets = offsets_from_sizes(sizes)
    target_name = bin_name if bin_name is not None else output_cue.with_suffix(".bin").name

    for file_entry, offset in zip(sheet.files, offsets):
        verbose(f"{escape(file_entry.filename)} starts at byte {offset}")

    try:
        combined = combine_files(sheet, target_name, offsets, config.strictness)
        if dry_run:
            text = render_cue(combined, config.strictness)
        else:
            write_cue(combined, output_cue, config.strictness, encoding=config.encoding)
    except CueIOError as e:
        error(escape(str(e)))
        sys.exit(EXIT_IO_ERROR)
    except CueError as e:
        error(escape(str(e)))
        sys.exit(EXIT_CUE_ERROR)

    if dry_run:
        click.echo(text, nl=False)
        sys.exit(EXIT_SUCCESS)

    success(
        f"Combined {len(sheet.files)} FILE(s), {combined.track_count} track(s) "
        f"into {escape(target_name)} -> {escape(str(output_cue))}"
    )
    info("Concatenate the source files in this order to build the binary:")
    for file_entry in sheet.files:
        info(f"  {escape(file_entry.filename)}")
