"""Record kinds found in a CUE sheet.

``FileKind`` and ``TrackKind`` members carry their canonical CUE text as
their value, so each enum is its own text <-> kind mapping.
"""

from __future__ import annotations

from enum import Enum


class LineKind(Enum):
    """Classification of a single raw CUE line."""

    EMPTY = "empty"
    REMARK = "remark"
    FILE = "file"
    TRACK = "track"
    INDEX = "index"
    INVALID = "invalid"


class _CueText(Enum):
    @property
    def text(self) -> str:
        """Canonical CUE sheet spelling of this kind."""
        return self.value

    @classmethod
    def from_text(cls, token: str):
        """Return the member spelled *token*, or None if nothing matches."""
        try:
            return cls(token)
        except ValueError:
            return None


class FileKind(_CueText):
    """Type token of a FILE record."""

    UNKNOWN = "UNKNOWN"
    BINARY = "BINARY"
    MP3 = "MP3"


class TrackKind(_CueText):
    """Type token of a TRACK record.

    AUDIO       Audio/Music (2352, 588 samples)
    CDG         Karaoke CD+G (2448)
    MODE1/2048  CD-ROM Mode 1 Data (cooked)
    MODE1/2352  CD-ROM Mode 1 Data (raw)
    MODE2/2336  CD-ROM XA Mode 2 Data (form mix)
    MODE2/2352  CD-ROM XA Mode 2 Data (raw)
    CDI/2336    CDI Mode 2 Data
    CDI/2352    CDI Mode 2 Data
    """

    UNKNOWN = "UNKNOWN"
    AUDIO = "AUDIO"
    CDG = "CDG"
    MODE1_2048 = "MODE1/2048"
    MODE1_2352 = "MODE1/2352"
    MODE2_2336 = "MODE2/2336"
    MODE2_2352 = "MODE2/2352"
    CDI_2336 = "CDI/2336"
    CDI_2352 = "CDI/2352"
