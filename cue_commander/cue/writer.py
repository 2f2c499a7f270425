"""Render CueSheet entities back into canonical CUE text."""

from __future__ import annotations

import logging
from pathlib import Path

from cue_commander.cue.models import (
    CueSheet,
    FileEntry,
    IndexEntry,
    TrackEntry,
    validate_file,
    validate_index,
    validate_track,
)
from cue_commander.cue.strictness import Strictness
from cue_commander.cue.timestamp import bytes_to_timestamp
from cue_commander.utils.linestore import LineStore

logger = logging.getLogger(__name__)


def file_line(entry: FileEntry, strictness: Strictness = Strictness.SILENT) -> str:
    validate_file(entry, strictness)
    return f'FILE "{entry.filename}" {entry.kind.text}'


def track_line(entry: TrackEntry, strictness: Strictness = Strictness.SILENT) -> str:
    validate_track(entry, strictness)
    return f"  TRACK {entry.id:02d} {entry.kind.text}"


def index_line(entry: IndexEntry, strictness: Strictness = Strictness.SILENT) -> str:
    validate_index(entry, strictness)
    return f"    INDEX {entry.id:02d} {bytes_to_timestamp(entry.byte_offset)}"


def render_lines(sheet: CueSheet, strictness: Strictness = Strictness.SILENT) -> list[str]:
    """Render every FILE, TRACK and INDEX of *sheet*, one line each.

    Entries are re-validated as they are rendered. Recoverable problems
    follow *strictness*; the offending values are written unchanged.
    """
    lines: list[str] = []
    for file_entry in sheet.files:
        lines.append(file_line(file_entry, strictness))
        for track in file_entry.tracks:
            lines.append(track_line(track, strictness))
            for index in track.indexes:
                lines.append(index_line(index, strictness))
    return lines


def render_cue(sheet: CueSheet, strictness: Strictness = Strictness.SILENT) -> str:
    """Render *sheet* as newline-terminated CUE text."""
    return "".join(f"{line}\n" for line in render_lines(sheet, strictness))


def write_cue(
    sheet: CueSheet,
    path: str | Path,
    strictness: Strictness = Strictness.SILENT,
    *,
    encoding: str | None = None,
) -> None:
    """Write *sheet* to *path*, atomically replacing any existing file.

    Nothing is written if rendering fails.

    Raises:
        CueIOError: If the file cannot be created or written.
        CueError: If an entry fails validation.
    """
    lines = render_lines(sheet, strictness)

    store = LineStore(path, encoding=encoding)
    store.create()
    for line in lines:
        store.append(line)
    store.overwrite()
    logger.info("Wrote %d CUE lines to %s", len(lines), path)
