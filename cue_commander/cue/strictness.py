"""Strictness policy for recoverable CUE validation problems."""

from __future__ import annotations

import logging
from enum import Enum

from cue_commander.exceptions import CueError

logger = logging.getLogger(__name__)


class Strictness(Enum):
    """How recoverable problems (unknown kinds, out-of-range ids,
    unrecognised lines) are treated.

    SILENT ignores them, WARN logs a warning and carries on, STRICT logs
    an error and raises.
    """

    SILENT = "silent"
    WARN = "warn"
    STRICT = "strict"

    @classmethod
    def from_name(cls, name: str) -> Strictness:
        """Look up a level by its case-insensitive name."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown strictness '{name}' (expected one of: {choices})") from None


def report(problem: CueError, strictness: Strictness) -> None:
    """Handle a recoverable problem according to *strictness*.

    Raises:
        CueError: *problem* itself, when strictness is STRICT.
    """
    if strictness is Strictness.SILENT:
        return
    if strictness is Strictness.WARN:
        logger.warning("%s", problem)
        return
    logger.error("%s", problem)
    raise problem
