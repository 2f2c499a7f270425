"""CUE sheet parser.

Classifies each line of a .cue file, extracts the FILE / TRACK / INDEX
fields and builds a :class:`CueSheet` from them. Matching is deliberately
whitespace sensitive: INDEX lines are recognised by four leading spaces
and TRACK lines by two, which is how those records are laid out on disk.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from cue_commander.cue.kinds import FileKind, LineKind, TrackKind
from cue_commander.cue.models import CueSheet
from cue_commander.cue.strictness import Strictness, report
from cue_commander.cue.timestamp import timestamp_to_bytes
from cue_commander.exceptions import (
    CueIOError,
    FileRecordProblem,
    IndexRecordProblem,
    InvalidFileRecordError,
    InvalidIndexRecordError,
    InvalidTrackRecordError,
    IOProblem,
    TrackRecordProblem,
    UnrecognizedLineError,
)
from cue_commander.utils.linestore import DEFAULT_MAX_BYTES, LineStore, split_lines

logger = logging.getLogger(__name__)

_WORD = re.compile(r"[^ \t\r]+")
_CUE_SUFFIXES = (".cue", ".CUE")

# Ordered: the first marker found in a line decides its kind
_LINE_MARKERS = (
    ("    INDEX", LineKind.INDEX),
    ("  TRACK", LineKind.TRACK),
    ('FILE "', LineKind.FILE),
    ("REM ", LineKind.REMARK),
)


def classify_line(
    line: str, strictness: Strictness = Strictness.SILENT, line_number: int | None = None
) -> LineKind:
    """Return the kind of record *line* holds.

    Lines matching nothing are reported as unrecognised under *strictness*
    and classified INVALID.
    """
    if not line:
        return LineKind.EMPTY

    for marker, kind in _LINE_MARKERS:
        if marker in line:
            return kind

    report(UnrecognizedLineError(line, line_number), strictness)
    return LineKind.INVALID


def get_word(line: str, index: int) -> str:
    """Return the *index*-th (1-based) word of *line*, or "" if there is none.

    Words are separated by runs of spaces, tabs and carriage returns.
    """
    index = max(index, 1)
    words = _WORD.findall(line)
    if index > len(words):
        return ""
    return words[index - 1]


def _parse_id(token: str) -> int | None:
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def parse_file_record(
    line: str, strictness: Strictness = Strictness.SILENT
) -> tuple[str, FileKind]:
    """Extract the filename and type of a FILE line.

    Raises:
        InvalidFileRecordError: If the filename is not quoted or the type
            token is missing; for an unknown type only under STRICT.
    """
    first_quote = line.find('"')
    closing_quote = line.find('"', first_quote + 1)
    if first_quote == -1 or closing_quote == -1:
        raise InvalidFileRecordError(FileRecordProblem.MISSING_FILENAME, line.strip())
    filename = line[first_quote + 1 : closing_quote]

    type_token = line[line.rfind('"') + 1 :].strip(" \t\r")
    if not type_token:
        raise InvalidFileRecordError(FileRecordProblem.CORRUPT_TOKEN, line.strip())

    kind = FileKind.from_text(type_token)
    if kind is None:
        report(InvalidFileRecordError(FileRecordProblem.UNKNOWN_KIND, type_token), strictness)
        kind = FileKind.UNKNOWN
    return filename, kind


def parse_track_record(
    line: str, strictness: Strictness = Strictness.SILENT
) -> tuple[int, TrackKind]:
    """Extract the number and type of a TRACK line.

    Raises:
        InvalidTrackRecordError: If the number or type token is missing or
            corrupt; for an unknown type only under STRICT.
    """
    track_id = _parse_id(get_word(line, 2))
    type_token = get_word(line, 3)
    if track_id is None or not type_token:
        raise InvalidTrackRecordError(TrackRecordProblem.CORRUPT_TOKEN, line.strip())

    kind = TrackKind.from_text(type_token)
    if kind is None:
        report(InvalidTrackRecordError(TrackRecordProblem.UNKNOWN_KIND, type_token), strictness)
        kind = TrackKind.UNKNOWN
    return track_id, kind


def parse_index_record(line: str) -> tuple[int, int]:
    """Extract the number and byte offset of an INDEX line.

    Raises:
        InvalidIndexRecordError: If the index number is missing or corrupt.
        TimestampFormatError: If the timestamp is malformed.
    """
    index_id = _parse_id(get_word(line, 2))
    if index_id is None:
        raise InvalidIndexRecordError(IndexRecordProblem.CORRUPT_TOKEN, line.strip())
    return index_id, timestamp_to_bytes(get_word(line, 3))


def parse_lines(lines: Iterable[str], strictness: Strictness = Strictness.SILENT) -> CueSheet:
    """Build a CueSheet from already line-split CUE text.

    Remarks and empty lines are skipped; unrecognised lines are skipped
    after being reported under *strictness*.
    """
    sheet = CueSheet()

    for line_number, line in enumerate(lines, 1):
        kind = classify_line(line, strictness, line_number)
        logger.debug("Line %d: %s", line_number, kind.name)

        if kind is LineKind.FILE:
            filename, file_kind = parse_file_record(line, strictness)
            sheet.push_file(filename, file_kind, strictness)
        elif kind is LineKind.TRACK:
            track_id, track_kind = parse_track_record(line, strictness)
            sheet.push_track(track_id, track_kind, strictness)
        elif kind is LineKind.INDEX:
            index_id, byte_offset = parse_index_record(line)
            sheet.push_index(index_id, byte_offset, strictness)

    return sheet


def parse_cue_text(text: str, strictness: Strictness = Strictness.SILENT) -> CueSheet:
    """Parse CUE sheet text held in memory."""
    return parse_lines(split_lines(text), strictness)


def validate_cue_filename(path: str | Path) -> None:
    """Make sure *path* names a .cue file.

    Raises:
        CueIOError: If the extension is not ``.cue`` or ``.CUE``.
    """
    if Path(path).suffix not in _CUE_SUFFIXES:
        raise CueIOError(IOProblem.NOT_A_CUE_FILE, Path(path))


def read_cue(
    path: str | Path,
    strictness: Strictness = Strictness.SILENT,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
    encoding: str | None = None,
) -> CueSheet:
    """Read and parse a .cue file.

    Args:
        path: Path to the .cue file.
        strictness: Policy for recoverable problems.
        max_bytes: Files larger than this are rejected before parsing.
        encoding: Character encoding. If None, tries UTF-8, CP1252 then Latin-1.

    Returns:
        The parsed CueSheet.

    Raises:
        CueIOError: If the file is not a .cue file or cannot be read.
        CueError: If the content is invalid.
    """
    validate_cue_filename(path)

    store = LineStore(path, max_bytes=max_bytes, encoding=encoding)
    store.read()
    store.normalize_line_endings()

    return parse_lines(
        (store.get_line(n) for n in range(1, store.line_count() + 1)), strictness
    )
