"""MSF timestamp <-> byte offset conversion.

Timestamps are in Minute:Second:Frame form. There are 75 sectors (frames)
per second and 2352 bytes per raw sector. Offsets are zero based: no
2-second lead-in is applied, so ``00:00:00`` is byte 0 of the image.
"""

from __future__ import annotations

from cue_commander.exceptions import (
    IndexRecordProblem,
    InvalidIndexRecordError,
    TimestampFormatError,
    TimestampProblem,
)

SECTOR_SIZE = 2352
SECTORS_PER_SECOND = 75
MAX_MINUTES = 99
TIMESTAMP_LENGTH = 8


def bytes_to_timestamp(byte_offset: int) -> str:
    """Convert a byte offset into an ``MM:SS:FF`` timestamp.

    Raises:
        InvalidIndexRecordError: If the offset is negative or not a whole
            number of sectors.
        TimestampFormatError: If the timestamp would exceed 99 minutes.
    """
    if byte_offset < 0:
        raise InvalidIndexRecordError(IndexRecordProblem.NEGATIVE_OFFSET, str(byte_offset))
    sectors, remainder = divmod(byte_offset, SECTOR_SIZE)
    if remainder != 0:
        raise InvalidIndexRecordError(IndexRecordProblem.SECTOR_MISALIGNMENT, str(byte_offset))

    seconds, frames = divmod(sectors, SECTORS_PER_SECOND)
    minutes, seconds = divmod(seconds, 60)

    if minutes > MAX_MINUTES:
        raise TimestampFormatError(TimestampProblem.MINUTES_OVERFLOW, f"{minutes} minutes")

    return f"{minutes:02d}:{seconds:02d}:{frames:02d}"


def timestamp_to_bytes(timestamp: str) -> int:
    """Convert an ``MM:SS:FF`` timestamp into a byte offset.

    Seconds above 59 and frames above 74 are accepted and simply carry
    over; keeping them in range is up to the caller.

    Raises:
        TimestampFormatError: If the timestamp is not 8 characters or a
            field is not a decimal number.
    """
    if len(timestamp) != TIMESTAMP_LENGTH:
        raise TimestampFormatError(TimestampProblem.WRONG_LENGTH, repr(timestamp))

    fields = (timestamp[0:2], timestamp[3:5], timestamp[6:8])
    if timestamp[2] != ":" or timestamp[5] != ":" or not all(_is_decimal(f) for f in fields):
        raise TimestampFormatError(TimestampProblem.CORRUPT_TOKEN, repr(timestamp))

    minutes, seconds, frames = (int(f) for f in fields)
    sectors = (minutes * 60 + seconds) * SECTORS_PER_SECOND + frames
    return sectors * SECTOR_SIZE


def _is_decimal(field: str) -> bool:
    return field.isascii() and field.isdigit()
