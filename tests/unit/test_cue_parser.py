"""Unit tests for the CUE sheet parser."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from cue_commander.cue.kinds import FileKind, LineKind, TrackKind
from cue_commander.cue.parser import (
    classify_line,
    get_word,
    parse_cue_text,
    parse_file_record,
    parse_index_record,
    parse_lines,
    parse_track_record,
    read_cue,
)
from cue_commander.cue.strictness import Strictness
from cue_commander.exceptions import (
    CueIOError,
    FileRecordProblem,
    IndexRecordProblem,
    InvalidFileRecordError,
    InvalidIndexRecordError,
    InvalidTrackRecordError,
    IOProblem,
    SequencingProblem,
    SequencingViolationError,
    TimestampFormatError,
    TrackRecordProblem,
    UnrecognizedLineError,
)

GAME_CUE = """\
FILE "game.bin" BINARY
  TRACK 01 MODE2/2352
    INDEX 01 00:00:00
  TRACK 02 AUDIO
    INDEX 00 00:02:00
    INDEX 01 00:04:00
"""

MULTI_BIN_CUE = """\
REM Dumped with one file per track
FILE "game (Track 1).bin" BINARY
  TRACK 01 MODE2/2352
    INDEX 01 00:00:00

FILE "game (Track 2).bin" BINARY
  TRACK 02 AUDIO
    INDEX 00 00:00:00
    INDEX 01 00:02:00
"""


# --- Line classification ---


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("    INDEX 01 00:00:00", LineKind.INDEX),
        ("  TRACK 01 AUDIO", LineKind.TRACK),
        ('FILE "foo.bin" BINARY', LineKind.FILE),
        ("REM hello", LineKind.REMARK),
        ("", LineKind.EMPTY),
        ("garbage line", LineKind.INVALID),
    ],
)
def test_classify_line(line: str, expected: LineKind) -> None:
    assert classify_line(line) is expected


def test_classify_is_indentation_sensitive() -> None:
    # Four spaces before TRACK still holds "  TRACK"
    assert classify_line("    TRACK 01 AUDIO") is LineKind.TRACK
    # INDEX with only two spaces is not an INDEX line
    assert classify_line("  INDEX 01 00:00:00") is LineKind.INVALID
    # Unindented TRACK / INDEX are not recognised
    assert classify_line("TRACK 01 AUDIO") is LineKind.INVALID
    assert classify_line("INDEX 01 00:00:00") is LineKind.INVALID


def test_classify_index_wins_over_file_marker() -> None:
    assert classify_line('    INDEX 01 00:00:00 FILE "x"') is LineKind.INDEX


def test_classify_rem_needs_trailing_space() -> None:
    assert classify_line("REM") is LineKind.INVALID


def test_classify_whitespace_only_line_is_invalid() -> None:
    assert classify_line("   ") is LineKind.INVALID


def test_classify_invalid_strict_raises() -> None:
    with pytest.raises(UnrecognizedLineError) as exc_info:
        classify_line("PERFORMER x", Strictness.STRICT, line_number=7)
    assert exc_info.value.line_number == 7
    assert "line 7" in str(exc_info.value)


def test_classify_invalid_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert classify_line("garbage line", Strictness.WARN) is LineKind.INVALID
    assert "garbage line" in caplog.text


# --- Word extraction ---


def test_get_word_basic() -> None:
    assert get_word("  TRACK 01 AUDIO", 1) == "TRACK"
    assert get_word("  TRACK 01 AUDIO", 2) == "01"
    assert get_word("  TRACK 01 AUDIO", 3) == "AUDIO"


def test_get_word_mixed_delimiters() -> None:
    assert get_word("\tTRACK\t \r02  MODE1/2048\r", 3) == "MODE1/2048"


def test_get_word_past_end() -> None:
    assert get_word("  TRACK 01", 3) == ""
    assert get_word("", 1) == ""


def test_get_word_zero_means_first() -> None:
    assert get_word("  TRACK 01", 0) == "TRACK"


# --- Record parsers ---


def test_parse_file_record() -> None:
    assert parse_file_record('FILE "game (Track 1).bin" BINARY') == (
        "game (Track 1).bin",
        FileKind.BINARY,
    )


def test_parse_file_record_trims_type_token() -> None:
    assert parse_file_record('FILE "a.mp3"   MP3 \r') == ("a.mp3", FileKind.MP3)


def test_parse_file_record_missing_closing_quote() -> None:
    with pytest.raises(InvalidFileRecordError) as exc_info:
        parse_file_record('FILE "game.bin BINARY')
    assert exc_info.value.reason is FileRecordProblem.MISSING_FILENAME


def test_parse_file_record_empty_type() -> None:
    with pytest.raises(InvalidFileRecordError) as exc_info:
        parse_file_record('FILE "game.bin"')
    assert exc_info.value.reason is FileRecordProblem.CORRUPT_TOKEN


def test_parse_file_record_unknown_type_silent() -> None:
    assert parse_file_record('FILE "a.wav" WAVE') == ("a.wav", FileKind.UNKNOWN)


def test_parse_file_record_unknown_type_strict() -> None:
    with pytest.raises(InvalidFileRecordError) as exc_info:
        parse_file_record('FILE "a.wav" WAVE', Strictness.STRICT)
    assert exc_info.value.reason is FileRecordProblem.UNKNOWN_KIND


def test_parse_track_record() -> None:
    assert parse_track_record("  TRACK 07 CDI/2336") == (7, TrackKind.CDI_2336)


def test_parse_track_record_missing_type() -> None:
    with pytest.raises(InvalidTrackRecordError) as exc_info:
        parse_track_record("  TRACK 01")
    assert exc_info.value.reason is TrackRecordProblem.CORRUPT_TOKEN


def test_parse_track_record_non_numeric_id() -> None:
    with pytest.raises(InvalidTrackRecordError) as exc_info:
        parse_track_record("  TRACK one AUDIO")
    assert exc_info.value.reason is TrackRecordProblem.CORRUPT_TOKEN


def test_parse_track_record_unknown_type_defaults() -> None:
    assert parse_track_record("  TRACK 01 MODE3/9999") == (1, TrackKind.UNKNOWN)


def test_parse_track_record_unknown_type_strict() -> None:
    with pytest.raises(InvalidTrackRecordError) as exc_info:
        parse_track_record("  TRACK 01 MODE3/9999", Strictness.STRICT)
    assert exc_info.value.reason is TrackRecordProblem.UNKNOWN_KIND


def test_parse_index_record() -> None:
    assert parse_index_record("    INDEX 01 00:02:00") == (1, 352800)


def test_parse_index_record_bad_id() -> None:
    with pytest.raises(InvalidIndexRecordError) as exc_info:
        parse_index_record("    INDEX xx 00:02:00")
    assert exc_info.value.reason is IndexRecordProblem.CORRUPT_TOKEN


def test_parse_index_record_bad_timestamp() -> None:
    with pytest.raises(TimestampFormatError):
        parse_index_record("    INDEX 01 2:00")


# --- Whole sheets ---


def test_end_to_end_parse() -> None:
    sheet = parse_cue_text(GAME_CUE)
    assert len(sheet.files) == 1
    game = sheet.files[0]
    assert game.filename == "game.bin"
    assert game.kind is FileKind.BINARY
    assert [(t.id, t.kind) for t in game.tracks] == [
        (1, TrackKind.MODE2_2352),
        (2, TrackKind.AUDIO),
    ]
    assert [(i.id, i.byte_offset) for i in game.tracks[0].indexes] == [(1, 0)]
    assert [(i.id, i.byte_offset) for i in game.tracks[1].indexes] == [(0, 352800), (1, 705600)]


def test_multi_file_sheet_skips_remarks_and_blank_lines() -> None:
    sheet = parse_cue_text(MULTI_BIN_CUE)
    assert [f.filename for f in sheet.files] == ["game (Track 1).bin", "game (Track 2).bin"]
    assert sheet.files[1].tracks[0].id == 2
    assert [i.byte_offset for i in sheet.files[1].tracks[0].indexes] == [0, 352800]


def test_unrecognised_lines_are_skipped_when_not_strict() -> None:
    lines = ['FILE "a.bin" BINARY', 'PERFORMER "Someone"', "  TRACK 01 AUDIO"]
    sheet = parse_lines(lines, Strictness.WARN)
    assert sheet.track_count == 1


def test_unrecognised_line_aborts_when_strict() -> None:
    lines = ['FILE "a.bin" BINARY', 'PERFORMER "Someone"']
    with pytest.raises(UnrecognizedLineError) as exc_info:
        parse_lines(lines, Strictness.STRICT)
    assert exc_info.value.line_number == 2


def test_track_before_file() -> None:
    with pytest.raises(SequencingViolationError) as exc_info:
        parse_lines(["  TRACK 01 AUDIO"])
    assert exc_info.value.reason is SequencingProblem.TRACK_WITHOUT_FILE


def test_index_before_track() -> None:
    with pytest.raises(SequencingViolationError) as exc_info:
        parse_lines(['FILE "a.bin" BINARY', "    INDEX 01 00:00:00"])
    assert exc_info.value.reason is SequencingProblem.INDEX_WITHOUT_TRACK


def test_empty_filename_is_fatal() -> None:
    with pytest.raises(InvalidFileRecordError) as exc_info:
        parse_lines(['FILE "" BINARY'])
    assert exc_info.value.reason is FileRecordProblem.MISSING_FILENAME



def test_text_splits_only_on_cue_line_endings() -> None:
    text = 'FILE "a\x85b\x0c.bin" BINARY\r\n  TRACK 01 AUDIO\r    INDEX 01 00:00:00\n'
    sheet = parse_cue_text(text, Strictness.STRICT)
    assert sheet.files[0].filename == "a\x85b\x0c.bin"
    assert sheet.track_count == 1
    assert sheet.files[0].tracks[0].indexes[0].byte_offset == 0


def test_text_and_file_parse_alike(write_cue_file: Callable[..., Path]) -> None:
    text = GAME_CUE.replace("game.bin", "game\u2028disc.bin").replace("\n", "\r\n")
    assert parse_cue_text(text) == read_cue(write_cue_file(text))


# --- Reading files ---


def test_read_cue(write_cue_file: Callable[..., Path]) -> None:
    sheet = read_cue(write_cue_file(GAME_CUE))
    assert sheet.files[0].tracks[1].indexes[1].byte_offset == 705600


def test_read_cue_crlf(write_cue_file: Callable[..., Path]) -> None:
    sheet = read_cue(write_cue_file(GAME_CUE.replace("\n", "\r\n")), Strictness.STRICT)
    assert sheet.track_count == 2
    assert sheet.files[0].kind is FileKind.BINARY


def test_read_cue_utf8_bom(write_cue_file: Callable[..., Path]) -> None:
    sheet = read_cue(write_cue_file("\ufeff" + GAME_CUE), Strictness.STRICT)
    assert sheet.files[0].filename == "game.bin"


def test_read_cue_latin1_fallback(write_cue_file: Callable[..., Path]) -> None:
    content = GAME_CUE.replace("game.bin", "Spiel für Jäger.bin")
    sheet = read_cue(write_cue_file(content, encoding="latin-1"))
    assert sheet.files[0].filename == "Spiel für Jäger.bin"


def test_read_cue_uppercase_extension(write_cue_file: Callable[..., Path]) -> None:
    sheet = read_cue(write_cue_file(GAME_CUE, name="GAME.CUE"))
    assert sheet.track_count == 2


def test_read_cue_rejects_other_extensions(write_cue_file: Callable[..., Path]) -> None:
    with pytest.raises(CueIOError) as exc_info:
        read_cue(write_cue_file(GAME_CUE, name="game.txt"))
    assert exc_info.value.reason is IOProblem.NOT_A_CUE_FILE


def test_read_cue_size_limit(write_cue_file: Callable[..., Path]) -> None:
    with pytest.raises(CueIOError) as exc_info:
        read_cue(write_cue_file(GAME_CUE), max_bytes=10)
    assert exc_info.value.reason is IOProblem.SIZE_LIMIT_EXCEEDED


def test_read_cue_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CueIOError) as exc_info:
        read_cue(tmp_path / "missing.cue")
    assert exc_info.value.reason is IOProblem.READ_FAILED
