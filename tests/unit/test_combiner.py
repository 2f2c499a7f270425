"""Unit tests for combining FILE entries into one."""

from __future__ import annotations

import logging

import pytest

from cue_commander.cue.combiner import combine_files, offsets_from_sizes
from cue_commander.cue.kinds import FileKind, TrackKind
from cue_commander.cue.models import CueSheet
from cue_commander.cue.strictness import Strictness
from cue_commander.cue.writer import render_cue
from cue_commander.exceptions import (
    CombineError,
    FileRecordProblem,
    IndexRecordProblem,
    InvalidFileRecordError,
    InvalidIndexRecordError,
)


@pytest.fixture
def split_sheet() -> CueSheet:
    """Two track images, the second starting with a two second pregap."""
    sheet = CueSheet()
    sheet.push_file("game (Track 1).bin", FileKind.BINARY)
    sheet.push_track(1, TrackKind.MODE2_2352)
    sheet.push_index(1, 0)
    sheet.push_file("game (Track 2).bin", FileKind.BINARY)
    sheet.push_track(2, TrackKind.AUDIO)
    sheet.push_index(0, 0)
    sheet.push_index(1, 352800)
    return sheet


def test_combine_rebases_indexes(split_sheet: CueSheet) -> None:
    combined = combine_files(split_sheet, "game.bin", [0, 352800])

    assert len(combined.files) == 1
    game = combined.files[0]
    assert game.filename == "game.bin"
    assert game.kind is FileKind.BINARY
    assert [(t.id, t.kind) for t in game.tracks] == [
        (1, TrackKind.MODE2_2352),
        (2, TrackKind.AUDIO),
    ]
    assert [(i.id, i.byte_offset) for i in game.tracks[1].indexes] == [(0, 352800), (1, 705600)]


def test_combine_renders_single_file_sheet(split_sheet: CueSheet) -> None:
    combined = combine_files(split_sheet, "game.bin", [0, 352800])
    assert render_cue(combined) == (
        'FILE "game.bin" BINARY\n'
        "  TRACK 01 MODE2/2352\n"
        "    INDEX 01 00:00:00\n"
        "  TRACK 02 AUDIO\n"
        "    INDEX 00 00:02:00\n"
        "    INDEX 01 00:04:00\n"
    )


def test_combine_does_not_touch_source(split_sheet: CueSheet) -> None:
    combine_files(split_sheet, "game.bin", [0, 352800])
    assert len(split_sheet.files) == 2
    assert split_sheet.files[1].tracks[0].indexes[1].byte_offset == 352800


def test_combine_clears_destination(split_sheet: CueSheet) -> None:
    destination = CueSheet()
    destination.push_file("stale.bin", FileKind.MP3)
    result = combine_files(split_sheet, "game.bin", [0, 352800], destination=destination)
    assert result is destination
    assert [f.filename for f in destination.files] == ["game.bin"]


def test_combine_keeps_repeated_ids() -> None:
    sheet = CueSheet()
    for name in ("a.bin", "b.bin"):
        sheet.push_file(name, FileKind.BINARY)
        sheet.push_track(1, TrackKind.AUDIO)
        sheet.push_index(1, 0)
    combined = combine_files(sheet, "ab.bin", [0, 2352])
    assert [t.id for t in combined.files[0].tracks] == [1, 1]
    assert [t.indexes[0].byte_offset for t in combined.files[0].tracks] == [0, 2352]


def test_combine_file_without_tracks() -> None:
    sheet = CueSheet()
    sheet.push_file("a.bin", FileKind.BINARY)
    combined = combine_files(sheet, "out.bin", [0])
    assert combined.files[0].tracks == []


def test_combine_empty_source() -> None:
    with pytest.raises(CombineError, match="No FILE"):
        combine_files(CueSheet(), "game.bin", [])


def test_combine_offset_count_mismatch(split_sheet: CueSheet) -> None:
    with pytest.raises(CombineError, match="Expected 2 byte offsets"):
        combine_files(split_sheet, "game.bin", [0])


def test_combine_rejects_misaligned_offset(split_sheet: CueSheet) -> None:
    with pytest.raises(InvalidIndexRecordError) as exc_info:
        combine_files(split_sheet, "game.bin", [0, 1000])
    assert exc_info.value.reason is IndexRecordProblem.SECTOR_MISALIGNMENT


def test_combine_mixed_kinds_warns(caplog: pytest.LogCaptureFixture) -> None:
    sheet = CueSheet()
    sheet.push_file("a.bin", FileKind.BINARY)
    sheet.push_file("b.mp3", FileKind.MP3)
    with caplog.at_level(logging.WARNING):
        combined = combine_files(sheet, "ab.bin", [0, 2352], Strictness.WARN)
    assert combined.files[0].kind is FileKind.BINARY
    assert "MP3" in caplog.text


def test_combine_mixed_kinds_strict() -> None:
    sheet = CueSheet()
    sheet.push_file("a.bin", FileKind.BINARY)
    sheet.push_file("b.mp3", FileKind.MP3)
    with pytest.raises(InvalidFileRecordError) as exc_info:
        combine_files(sheet, "ab.bin", [0, 2352], Strictness.STRICT)
    assert exc_info.value.reason is FileRecordProblem.MIXED_KINDS


@pytest.mark.parametrize(
    ("sizes", "expected"),
    [
        ([], []),
        ([352800], [0]),
        ([352800, 2352, 4704], [0, 352800, 355152]),
    ],
)
def test_offsets_from_sizes(sizes: list[int], expected: list[int]) -> None:
    assert offsets_from_sizes(sizes) == expected
