"""Clock helpers for identifier timestamps and log metadata."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from seqgen.common.constants import TIMESTAMP_WIDTH

Clock = Callable[[], datetime]


def local_now() -> datetime:
    return datetime.now()


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def resolve_clock(mode: str) -> Clock:
    if mode == "utc":
        return utc_now
    if mode == "local":
        return local_now
    raise ValueError(f"Unknown clock mode: {mode}")


def format_clock_reading(moment: datetime) -> str:
    """Render ``moment`` as ``YYYYMMDDHHMMSSmmm`` (17 digits, millisecond precision).

    Raises ``ValueError`` if the rendering is not exactly 17 digits, e.g. for
    years before 1000 where ``%Y`` is not zero-padded on every platform.
    """
    rendered = f"{moment.strftime('%Y%m%d%H%M%S')}{moment.microsecond // 1000:03d}"
    if len(rendered) != TIMESTAMP_WIDTH or not rendered.isdigit():
        raise ValueError(f"Clock reading does not render as {TIMESTAMP_WIDTH} digits: {rendered!r}")
    return rendered


def parse_clock_reading(value: str) -> datetime:
    if len(value) != TIMESTAMP_WIDTH or not value.isdigit():
        raise ValueError(f"Expected {TIMESTAMP_WIDTH} digits, got {value!r}")
    parsed = datetime.strptime(value[:14], "%Y%m%d%H%M%S")
    return parsed.replace(microsecond=int(value[14:]) * 1000)


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")
