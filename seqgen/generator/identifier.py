"""Identifier layout: timestamp, counter segment and random suffix."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from seqgen.common.constants import (
    DEFAULT_MAX_PER_MSEC_SIZE,
    RANDOM_SUFFIX_MAX,
    RANDOM_SUFFIX_MIN,
    RANDOM_SUFFIX_WIDTH,
    TIMESTAMP_WIDTH,
)
from seqgen.common.errors import IdentifierFormatError
from seqgen.common.time_utils import parse_clock_reading


@dataclass(frozen=True)
class IdentifierParts:
    timestamp: datetime
    counter: int
    suffix: int


def counter_width(max_per_msec_size: int) -> int:
    return len(str(max_per_msec_size))


def counter_segment(value: int, max_per_msec_size: int) -> str:
    """Zero-pad ``value`` to the width of the ceiling so every counter in
    ``[0, max_per_msec_size]`` renders distinctly at a constant width."""
    return f"{value:0{counter_width(max_per_msec_size)}d}"


def identifier_length(max_per_msec_size: int) -> int:
    return TIMESTAMP_WIDTH + counter_width(max_per_msec_size) + RANDOM_SUFFIX_WIDTH


def is_well_formed(identifier: str, max_per_msec_size: int) -> bool:
    return (
        len(identifier) == identifier_length(max_per_msec_size)
        and identifier.isascii()
        and identifier.isdigit()
    )


def parse_identifier(identifier: str, max_per_msec_size: int = DEFAULT_MAX_PER_MSEC_SIZE) -> IdentifierParts:
    if not is_well_formed(identifier, max_per_msec_size):
        raise IdentifierFormatError(
            f"Expected {identifier_length(max_per_msec_size)} ASCII digits, got {identifier!r}"
        )

    width = counter_width(max_per_msec_size)
    stamp = identifier[:TIMESTAMP_WIDTH]
    counter = int(identifier[TIMESTAMP_WIDTH : TIMESTAMP_WIDTH + width])
    suffix = int(identifier[TIMESTAMP_WIDTH + width :])

    try:
        timestamp = parse_clock_reading(stamp)
    except ValueError as exc:
        raise IdentifierFormatError(f"Invalid timestamp segment: {stamp}") from exc
    if counter > max_per_msec_size:
        raise IdentifierFormatError(f"Counter segment {counter} exceeds ceiling {max_per_msec_size}")
    if not RANDOM_SUFFIX_MIN <= suffix <= RANDOM_SUFFIX_MAX:
        raise IdentifierFormatError(f"Random suffix {suffix} out of range")

    return IdentifierParts(timestamp=timestamp, counter=counter, suffix=suffix)
