"""CUE sheet data model.

A sheet is an ordered list of FILE entries, each owning its TRACKs, each
owning its INDEXes. Records are appended to the most recently added parent,
so append order is significant.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from cue_commander.cue.kinds import FileKind, TrackKind
from cue_commander.cue.strictness import Strictness, report
from cue_commander.cue.timestamp import SECTOR_SIZE
from cue_commander.exceptions import (
    FileRecordProblem,
    IndexRecordProblem,
    InvalidFileRecordError,
    InvalidIndexRecordError,
    InvalidTrackRecordError,
    SequencingProblem,
    SequencingViolationError,
    TrackRecordProblem,
)

MAX_TRACK_ID = 99
MAX_INDEX_ID = 99

# A filename is written between double quotes on a single line
_UNQUOTABLE = frozenset('"\r\n')


@dataclass
class IndexEntry:
    """An INDEX: a position, in bytes, inside its FILE."""

    id: int
    byte_offset: int = 0


@dataclass
class TrackEntry:
    """A TRACK and the INDEXes that mark its positions."""

    id: int
    kind: TrackKind = TrackKind.UNKNOWN
    indexes: list[IndexEntry] = field(default_factory=list)


@dataclass
class FileEntry:
    """A FILE (one binary or audio image) and its TRACKs."""

    filename: str
    kind: FileKind = FileKind.UNKNOWN
    tracks: list[TrackEntry] = field(default_factory=list)


def validate_file(entry: FileEntry, strictness: Strictness = Strictness.SILENT) -> None:
    """Check a FILE entry.

    Raises:
        InvalidFileRecordError: Always for a missing filename or one that
            holds a double quote or line break; for an
            UNKNOWN kind only under STRICT.
    """
    if not entry.filename:
        raise InvalidFileRecordError(FileRecordProblem.MISSING_FILENAME)

    if _UNQUOTABLE.intersection(entry.filename):
        raise InvalidFileRecordError(FileRecordProblem.UNQUOTABLE_FILENAME, repr(entry.filename))

    if entry.kind is FileKind.UNKNOWN:
        report(InvalidFileRecordError(FileRecordProblem.UNKNOWN_KIND, entry.filename), strictness)


def validate_track(entry: TrackEntry, strictness: Strictness = Strictness.SILENT) -> None:
    """Check a TRACK entry; both problems are recoverable."""
    if entry.id > MAX_TRACK_ID:
        report(
            InvalidTrackRecordError(TrackRecordProblem.TOO_MANY_TRACKS, f"TRACK {entry.id}"),
            strictness,
        )

    if entry.kind is TrackKind.UNKNOWN:
        report(
            InvalidTrackRecordError(TrackRecordProblem.UNKNOWN_KIND, f"TRACK {entry.id:02d}"),
            strictness,
        )


def validate_index(entry: IndexEntry, strictness: Strictness = Strictness.SILENT) -> None:
    """Check an INDEX entry.

    Raises:
        InvalidIndexRecordError: Always for a negative or misaligned byte
            offset; for an id above 99 only under STRICT.
    """
    if entry.id > MAX_INDEX_ID:
        report(
            InvalidIndexRecordError(IndexRecordProblem.TOO_MANY_INDEXES, f"INDEX {entry.id}"),
            strictness,
        )

    if entry.byte_offset < 0:
        raise InvalidIndexRecordError(IndexRecordProblem.NEGATIVE_OFFSET, str(entry.byte_offset))

    if entry.byte_offset % SECTOR_SIZE != 0:
        raise InvalidIndexRecordError(
            IndexRecordProblem.SECTOR_MISALIGNMENT, str(entry.byte_offset)
        )


@dataclass
class CueSheet:
    """An in-memory CUE sheet.

    TRACKs go to the last FILE and INDEXes to the last TRACK of that FILE.
    Track and index ids are stored as given: neither ordering nor
    uniqueness is checked.
    """

    files: list[FileEntry] = field(default_factory=list)

    @property
    def current_file(self) -> FileEntry | None:
        return self.files[-1] if self.files else None

    @property
    def current_track(self) -> TrackEntry | None:
        current = self.current_file
        if current is None or not current.tracks:
            return None
        return current.tracks[-1]

    @property
    def track_count(self) -> int:
        return sum(len(f.tracks) for f in self.files)

    def iter_tracks(self) -> Iterator[tuple[FileEntry, TrackEntry]]:
        """Yield every (file, track) pair in sheet order."""
        for file_entry in self.files:
            for track in file_entry.tracks:
                yield file_entry, track

    def clear(self) -> None:
        self.files.clear()

    def push_file(
        self, filename: str, kind: FileKind, strictness: Strictness = Strictness.SILENT
    ) -> FileEntry:
        """Validate and append a new FILE."""
        entry = FileEntry(filename=filename, kind=kind)
        validate_file(entry, strictness)
        self.files.append(entry)
        return entry

    def push_track(
        self, track_id: int, kind: TrackKind, strictness: Strictness = Strictness.SILENT
    ) -> TrackEntry:
        """Validate and append a new TRACK to the current FILE.

        Raises:
            SequencingViolationError: If no FILE has been added yet.
        """
        current = self.current_file
        if current is None:
            raise SequencingViolationError(SequencingProblem.TRACK_WITHOUT_FILE)

        entry = TrackEntry(id=track_id, kind=kind)
        validate_track(entry, strictness)
        current.tracks.append(entry)
        return entry

    def push_index(
        self, index_id: int, byte_offset: int, strictness: Strictness = Strictness.SILENT
    ) -> IndexEntry:
        """Validate and append a new INDEX to the current TRACK.

        Raises:
            SequencingViolationError: If the current FILE has no TRACK.
        """
        current = self.current_track
        if current is None:
            raise SequencingViolationError(SequencingProblem.INDEX_WITHOUT_TRACK)

        entry = IndexEntry(id=index_id, byte_offset=byte_offset)
        validate_index(entry, strictness)
        current.indexes.append(entry)
        return entry
