"""Thread-safe, time-ordered sequence number generation.

An identifier is ``timestamp ++ counter segment ++ random suffix``:

* timestamp: the wall clock as ``YYYYMMDDHHMMSSmmm`` (17 digits)
* counter segment: a per-process counter in ``[0, max_per_msec_size]``,
  zero-padded to the width of the ceiling
* random suffix: a uniform draw from ``[100000, 999999]``

The counter lives in a :class:`SequenceCounter` that owns the lock guarding
it. Timestamp capture, counter read, composition and counter commit all run
under that lock, and the counter is only written once a well-formed
identifier exists, so a failed call leaves the counter untouched.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Protocol

from seqgen.common.config_loader import GeneratorConfig
from seqgen.common.constants import DEFAULT_MAX_PER_MSEC_SIZE, RANDOM_SUFFIX_MAX, RANDOM_SUFFIX_MIN
from seqgen.common.errors import (
    ClockFormatError,
    ConfigError,
    ContractError,
    RandomSourceError,
    SequenceError,
)
from seqgen.common.time_utils import Clock, format_clock_reading, local_now, resolve_clock
from seqgen.generator.identifier import counter_segment, identifier_length, is_well_formed

LOGGER = logging.getLogger("seqgen.sequence")


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class SequenceCounter:
    """Counter state shared by every caller of one generator.

    ``value`` may be ``max_per_msec_size + 1`` between calls; the next call
    resets it to 0 before composing.
    """

    def __init__(self, max_per_msec_size: int = DEFAULT_MAX_PER_MSEC_SIZE, start: int = 0) -> None:
        if isinstance(max_per_msec_size, bool) or not isinstance(max_per_msec_size, int) or max_per_msec_size < 1:
            raise ConfigError(f"max_per_msec_size must be an integer >= 1, got {max_per_msec_size!r}")
        self.max_per_msec_size = max_per_msec_size
        self._check(start)
        self.value = start
        self.lock = threading.Lock()

    def _check(self, value: int) -> None:
        if not 0 <= value <= self.max_per_msec_size + 1:
            raise ConfigError(f"Counter value {value} outside [0, {self.max_per_msec_size + 1}]")

    def current(self) -> int:
        with self.lock:
            return self.value

    def force(self, value: int) -> None:
        self._check(value)
        with self.lock:
            self.value = value


class SequenceGenerator:
    def __init__(
        self,
        *,
        counter: SequenceCounter | None = None,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.counter = counter if counter is not None else SequenceCounter()
        self.clock = clock or local_now
        self.random_source = random_source if random_source is not None else random.SystemRandom()
        self.logger = logger or LOGGER

    @property
    def max_per_msec_size(self) -> int:
        return self.counter.max_per_msec_size

    @property
    def identifier_length(self) -> int:
        return identifier_length(self.max_per_msec_size)

    def _read_timestamp(self) -> str:
        try:
            return format_clock_reading(self.clock())
        except Exception as exc:
            raise ClockFormatError(f"Unable to format clock reading: {exc}") from exc

    def _draw_suffix(self) -> int:
        try:
            suffix = self.random_source.randint(RANDOM_SUFFIX_MIN, RANDOM_SUFFIX_MAX)
        except Exception as exc:
            raise RandomSourceError(f"Random source unavailable: {exc}") from exc
        if isinstance(suffix, bool) or not isinstance(suffix, int) or not RANDOM_SUFFIX_MIN <= suffix <= RANDOM_SUFFIX_MAX:
            raise RandomSourceError(f"Random source returned out-of-range value: {suffix!r}")
        return suffix

    def generate_sequence_no(self) -> str:
        ceiling = self.max_per_msec_size
        wrapped = False
        try:
            with self.counter.lock:
                timestamp = self._read_timestamp()
                value = self.counter.value
                if value > ceiling:
                    value = 0
                    wrapped = True
                suffix = self._draw_suffix()
                identifier = f"{timestamp}{counter_segment(value, ceiling)}{suffix}"
                if not is_well_formed(identifier, ceiling):
                    raise ContractError(f"Composed identifier is malformed: {identifier!r}")
                self.counter.value = value + 1
        except SequenceError as exc:
            self.logger.error(
                "sequence generation failed: %s",
                exc,
                extra={"event": "GENERATE_FAIL", "status": "error", "error_code": exc.error_code},
            )
            raise

        if wrapped:
            self.logger.debug("counter reset", extra={"event": "COUNTER_RESET", "status": "ok"})
        return identifier


def build_generator(config: GeneratorConfig, *, logger: logging.Logger | None = None) -> SequenceGenerator:
    if config.random_source == "seeded":
        random_source: RandomSource = random.Random(config.seed)
    else:
        random_source = random.SystemRandom()
    return SequenceGenerator(
        counter=SequenceCounter(config.max_per_msec_size),
        clock=resolve_clock(config.clock),
        random_source=random_source,
        logger=logger,
    )


# Process-wide generator behind generate_sequence_no(); created once at import
# with the default ceiling, local clock and system random source.
_default_generator = SequenceGenerator()


def generate_sequence_no() -> str:
    return _default_generator.generate_sequence_no()
