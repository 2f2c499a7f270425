"""CUE sheet model, parser, writer and combiner."""

from cue_commander.cue.combiner import combine_files, offsets_from_sizes
from cue_commander.cue.kinds import FileKind, LineKind, TrackKind
from cue_commander.cue.models import CueSheet, FileEntry, IndexEntry, TrackEntry
from cue_commander.cue.parser import classify_line, parse_cue_text, parse_lines, read_cue
from cue_commander.cue.strictness import Strictness
from cue_commander.cue.timestamp import SECTOR_SIZE, bytes_to_timestamp, timestamp_to_bytes
from cue_commander.cue.writer import render_cue, render_lines, write_cue

__all__ = [
    "SECTOR_SIZE",
    "CueSheet",
    "FileEntry",
    "FileKind",
    "IndexEntry",
    "LineKind",
    "Strictness",
    "TrackEntry",
    "TrackKind",
    "bytes_to_timestamp",
    "classify_line",
    "combine_files",
    "offsets_from_sizes",
    "parse_cue_text",
    "parse_lines",
    "read_cue",
    "render_cue",
    "render_lines",
    "timestamp_to_bytes",
    "write_cue",
]
