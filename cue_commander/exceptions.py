"""Exception hierarchy for cue-commander."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class CueCommanderError(Exception):
    """Base exception for all cue-commander errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all cue-commander errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(CueCommanderError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# CUE Errors
class CueError(CueCommanderError):
    """CUE sheet content or usage errors."""

    pass


class UnrecognizedLineError(CueError):
    """A line matches no known CUE record."""

    def __init__(self, line: str, line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Unrecognised CUE line{where}: {line!r}")


class FileRecordProblem(str, Enum):
    MISSING_FILENAME = "A FILE has no filename"
    UNKNOWN_KIND = "A FILE is of type UNKNOWN"
    CORRUPT_TOKEN = "A FILE type token is missing or corrupt"
    UNQUOTABLE_FILENAME = "A FILE name contains a double quote or line break"
    MIXED_KINDS = "Combined FILEs are of differing types"


class InvalidFileRecordError(CueError):
    """A FILE record is invalid."""

    def __init__(self, reason: FileRecordProblem, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(_with_detail(reason.value, detail))


class TrackRecordProblem(str, Enum):
    TOO_MANY_TRACKS = "TRACK number exceeds 99. Not a standard CD"
    UNKNOWN_KIND = "A TRACK is of type UNKNOWN"
    CORRUPT_TOKEN = "A TRACK record is invalid or corrupt"


class InvalidTrackRecordError(CueError):
    """A TRACK record is invalid."""

    def __init__(self, reason: TrackRecordProblem, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(_with_detail(reason.value, detail))


class IndexRecordProblem(str, Enum):
    TOO_MANY_INDEXES = "INDEX number exceeds 99. Not a standard CD"
    SECTOR_MISALIGNMENT = (
        "Byte offset does not align with the 2352 byte sector size. "
        "Incorrect TRACK mode or corrupt image"
    )
    NEGATIVE_OFFSET = "INDEX byte offset is negative"
    CORRUPT_TOKEN = "An INDEX record is invalid or corrupt"


class InvalidIndexRecordError(CueError):
    """An INDEX record is invalid."""

    def __init__(self, reason: IndexRecordProblem, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(_with_detail(reason.value, detail))


class TimestampProblem(str, Enum):
    WRONG_LENGTH = "Timestamp is not in MM:SS:FF form"
    MINUTES_OVERFLOW = "Timestamp exceeds 99 minutes"
    CORRUPT_TOKEN = "Timestamp contains non-numeric fields"


class TimestampFormatError(CueError):
    """An MSF timestamp cannot be converted."""

    def __init__(self, reason: TimestampProblem, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(_with_detail(reason.value, detail))


class SequencingProblem(str, Enum):
    TRACK_WITHOUT_FILE = "Attempted to add a TRACK, but no FILE exists"
    INDEX_WITHOUT_TRACK = "Attempted to add an INDEX, but no TRACK exists"


class SequencingViolationError(CueError):
    """A record was appended with no parent to hold it."""

    def __init__(self, reason: SequencingProblem) -> None:
        self.reason = reason
        super().__init__(reason.value)


class CombineError(CueError):
    """FILE entries cannot be combined."""

    pass


# I/O Errors
class IOProblem(str, Enum):
    CREATE_FAILED = "Failed to create the .cue file"
    READ_FAILED = "Failed to read the .cue file"
    SIZE_LIMIT_EXCEEDED = "The .cue file exceeds the size limit"
    NOT_A_CUE_FILE = "The input file is not a .cue file"


class CueIOError(CueCommanderError):
    """Reading or writing a .cue file failed."""

    def __init__(self, reason: IOProblem, path: Path, detail: str = "") -> None:
        self.reason = reason
        self.path = path
        self.detail = detail
        super().__init__(_with_detail(f"{reason.value}: {path}", detail))


def _with_detail(message: str, detail: str) -> str:
    return f"{message} ({detail})" if detail else message
