"""Merge the FILE entries of a CUE sheet into a single FILE.

Used when several track images are concatenated into one binary: every
INDEX is moved into the byte space of the combined file by adding the
offset at which its source file starts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cue_commander.cue.models import CueSheet
from cue_commander.cue.strictness import Strictness, report
from cue_commander.exceptions import CombineError, FileRecordProblem, InvalidFileRecordError

logger = logging.getLogger(__name__)


def offsets_from_sizes(sizes: Sequence[int]) -> list[int]:
    """Return the start offset of each file when files of *sizes* are
    concatenated in order.
    """
    offsets: list[int] = []
    position = 0
    for size in sizes:
        offsets.append(position)
        position += size
    return offsets


def combine_files(
    source: CueSheet,
    output_filename: str,
    offsets: Sequence[int],
    strictness: Strictness = Strictness.SILENT,
    destination: CueSheet | None = None,
) -> CueSheet:
    """Combine every FILE of *source* into one FILE named *output_filename*.

    Args:
        source: Sheet whose FILE entries are merged, in order.
        output_filename: Filename of the combined FILE entry.
        offsets: Byte offset at which each source FILE starts inside the
            combined file; one per source FILE.
        strictness: Policy for recoverable problems.
        destination: Sheet to fill. It is cleared first. A new sheet is
            used when omitted.

    Returns:
        The destination sheet, holding exactly one FILE. Its kind is taken
        from the first source FILE. Track and index ids are copied as they
        are, so ids repeated across source files stay repeated.

    Raises:
        CombineError: If *source* has no FILE or *offsets* does not hold
            one entry per source FILE.
    """
    if not source.files:
        raise CombineError("No FILE entries to combine")
    if len(offsets) != len(source.files):
        raise CombineError(
            f"Expected {len(source.files)} byte offsets (one per FILE), got {len(offsets)}"
        )

    kind = source.files[0].kind
    mixed = sorted({f.kind.text for f in source.files if f.kind is not kind})
    if mixed:
        report(
            InvalidFileRecordError(
                FileRecordProblem.MIXED_KINDS, f"using {kind.text}, also found {', '.join(mixed)}"
            ),
            strictness,
        )

    combined = destination if destination is not None else CueSheet()
    combined.clear()
    combined.push_file(output_filename, kind, strictness)

    for file_entry, offset in zip(source.files, offsets):
        logger.debug("Rebasing %s by %d bytes", file_entry.filename, offset)
        for track in file_entry.tracks:
            combined.push_track(track.id, track.kind, strictness)
            for index in track.indexes:
                combined.push_index(index.id, index.byte_offset + offset, strictness)

    return combined
