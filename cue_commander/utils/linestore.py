"""Line-oriented text file store used to read and write .cue files."""

from __future__ import annotations

import logging
from pathlib import Path

from cue_commander.exceptions import CueIOError, IOProblem
from cue_commander.utils.fileops import atomic_write

logger = logging.getLogger(__name__)

# Safety ceiling for input files: a real cue sheet is a few KB at most
DEFAULT_MAX_BYTES = 102400

# CP1252 is tried before Latin-1 because it's a superset that handles
# Windows-generated cue files. Latin-1 is last resort as it accepts any byte.
FALLBACK_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def split_lines(text: str) -> list[str]:
    """Split *text* on LF, CRLF and lone CR, as a .cue file is read.

    Other characters that :meth:`str.splitlines` treats as breaks (form feed,
    NEL, U+2028 and so on) stay inside the line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    result: list[str] = []
    for line in lines:
        if line.endswith("\r"):
            line = line[:-1]
        result.extend(line.split("\r"))
    return result


class LineStore:
    """Holds a text file as a list of lines.

    Lines are read whole with :meth:`read`, inspected with
    :meth:`get_line` (1-indexed), and written back with :meth:`create`,
    :meth:`append` and :meth:`overwrite`.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        max_bytes: int = DEFAULT_MAX_BYTES,
        encoding: str | None = None,
        verbose: bool = False,
    ) -> None:
        self.path = Path(path)
        self.max_bytes = max_bytes
        self.encoding = encoding
        self.verbose = verbose
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def _log(self, message: str, *args: object) -> None:
        if self.verbose:
            logger.debug(message, *args)

    def read(self) -> None:
        """Load the file into memory, replacing any buffered lines.

        Raises:
            CueIOError: If the file is too large, unreadable or cannot be decoded.
        """
        try:
            size = self.path.stat().st_size
            if size > self.max_bytes:
                raise CueIOError(
                    IOProblem.SIZE_LIMIT_EXCEEDED,
                    self.path,
                    f"{size} bytes, limit is {self.max_bytes}",
                )
            raw = self.path.read_bytes()
        except OSError as e:
            raise CueIOError(IOProblem.READ_FAILED, self.path, str(e)) from e

        text = self._decode(raw)
        if text.startswith("\ufeff"):
            text = text[1:]

        self._lines = text.split("\n")
        # A trailing newline terminates the last line rather than starting a new one
        if self._lines and self._lines[-1] == "":
            self._lines.pop()
        self._log("Read %d lines (%d bytes) from %s", len(self._lines), size, self.path)

    def _decode(self, raw: bytes) -> str:
        if self.encoding is not None:
            try:
                return raw.decode(self.encoding)
            except (UnicodeDecodeError, LookupError) as e:
                raise CueIOError(
                    IOProblem.READ_FAILED, self.path, f"encoding '{self.encoding}': {e}"
                ) from e

        for enc in FALLBACK_ENCODINGS:
            try:
                text = raw.decode(enc)
            except UnicodeDecodeError:
                continue
            self._log("Decoded %s as %s", self.path, enc)
            return text

        raise CueIOError(IOProblem.READ_FAILED, self.path, "no usable text encoding")

    def normalize_line_endings(self) -> None:
        """Convert DOS and old Mac line endings to Unix ones."""
        normalized: list[str] = []
        for line in self._lines:
            # Lines were split on LF, so CRLF leaves a trailing CR behind
            if line.endswith("\r"):
                line = line[:-1]
            normalized.extend(line.split("\r"))
        self._lines = normalized

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, number: int) -> str:
        """Return line *number*, counting from 1."""
        if number < 1 or number > len(self._lines):
            raise IndexError(f"Line {number} out of range (1-{len(self._lines)})")
        return self._lines[number - 1]

    def append(self, line: str) -> None:
        self._lines.append(line)

    def create(self) -> None:
        """Start a new, empty file buffer for writing.

        Raises:
            CueIOError: If the target directory does not exist.
        """
        if not self.path.parent.is_dir():
            raise CueIOError(
                IOProblem.CREATE_FAILED, self.path, f"no such directory: {self.path.parent}"
            )
        self._lines = []
        self._log("Created new buffer for %s", self.path)

    def overwrite(self) -> None:
        """Atomically replace the file on disk with the buffered lines.

        Raises:
            CueIOError: If the file cannot be written.
        """
        content = "".join(f"{line}\n" for line in self._lines)
        try:
            atomic_write(self.path, content, encoding=self.encoding or "utf-8")
        except (OSError, UnicodeEncodeError, LookupError) as e:
            raise CueIOError(IOProblem.CREATE_FAILED, self.path, str(e)) from e
        self._log("Wrote %d lines to %s", len(self._lines), self.path)
