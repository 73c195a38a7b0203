from __future__ import annotations

import logging
from datetime import datetime

import pytest

from seqgen.common.config_loader import GeneratorConfig
from seqgen.common.errors import ClockFormatError, ConfigError, RandomSourceError
from seqgen.generator.identifier import identifier_length, parse_identifier
from seqgen.generator.sequence import SequenceCounter, SequenceGenerator, build_generator, generate_sequence_no

FROZEN = datetime(2026, 2, 17, 9, 30, 15, 123456)
STAMP = "20260217093015123"


class FixedRandom:
    def __init__(self, value: int = 123456):
        self.value = value
        self.calls = 0

    def randint(self, a, b):
        self.calls += 1
        return self.value


class BrokenRandom:
    def randint(self, a, b):
        raise NotImplementedError("no entropy source")


def make_generator(max_per_msec_size: int = 1000, **kwargs) -> SequenceGenerator:
    return SequenceGenerator(
        counter=SequenceCounter(max_per_msec_size),
        clock=kwargs.pop("clock", lambda: FROZEN),
        random_source=kwargs.pop("random_source", FixedRandom()),
        **kwargs,
    )


def test_first_two_calls_at_frozen_clock():
    generator = make_generator()

    assert generator.generate_sequence_no() == f"{STAMP}0000123456"
    assert generator.generate_sequence_no() == f"{STAMP}0001123456"
    assert generator.counter.current() == 2


def test_call_1002_resets_counter_segment():
    generator = make_generator()
    identifiers = [generator.generate_sequence_no() for _ in range(1002)]

    assert identifiers[999] == f"{STAMP}0999123456"
    assert identifiers[1000] == f"{STAMP}1000123456"
    assert identifiers[1001] == f"{STAMP}0000123456"
    assert generator.counter.current() == 1


def test_forced_counter_above_ceiling_resets_before_composition():
    counter = SequenceCounter(9)
    counter.force(10)
    generator = SequenceGenerator(counter=counter, clock=lambda: FROZEN, random_source=FixedRandom())

    assert generator.generate_sequence_no() == f"{STAMP}0123456"
    assert counter.current() == 1


@pytest.mark.parametrize("ceiling", [1, 9, 10, 99, 999, 1000])
def test_identifier_width_is_constant_through_wraparound(ceiling):
    generator = make_generator(ceiling, random_source=FixedRandom(999999))
    expected = identifier_length(ceiling)

    for _ in range(ceiling + 3):
        identifier = generator.generate_sequence_no()
        assert len(identifier) == expected
        assert identifier.isdigit()
        assert parse_identifier(identifier, ceiling).counter <= ceiling


def test_clock_failure_leaves_counter_untouched():
    def broken_clock():
        raise OSError("clock unavailable")

    generator = make_generator(clock=broken_clock)
    generator.counter.force(7)

    with pytest.raises(ClockFormatError):
        generator.generate_sequence_no()
    assert generator.counter.current() == 7
    assert not generator.counter.lock.locked()


def test_non_datetime_clock_reading_is_a_clock_failure():
    generator = make_generator(clock=lambda: "now")

    with pytest.raises(ClockFormatError):
        generator.generate_sequence_no()
    assert generator.counter.current() == 0


def test_random_failure_does_not_commit_pending_reset():
    generator = make_generator(random_source=BrokenRandom())
    generator.counter.force(1001)

    with pytest.raises(RandomSourceError) as excinfo:
        generator.generate_sequence_no()
    assert isinstance(excinfo.value.__cause__, NotImplementedError)
    assert generator.counter.current() == 1001


def test_out_of_range_random_draw_is_rejected():
    generator = make_generator(random_source=FixedRandom(42))

    with pytest.raises(RandomSourceError):
        generator.generate_sequence_no()
    assert generator.counter.current() == 0


def test_failure_is_logged_with_error_code(caplog):
    caplog.set_level(logging.ERROR, logger="seqgen.sequence")
    generator = make_generator(random_source=BrokenRandom())

    with pytest.raises(RandomSourceError):
        generator.generate_sequence_no()

    record = caplog.records[-1]
    assert record.error_code == "RANDOM_SOURCE_FAILURE"
    assert record.event == "GENERATE_FAIL"


def test_counter_rejects_invalid_ceiling_and_values():
    with pytest.raises(ConfigError):
        SequenceCounter(0)
    with pytest.raises(ConfigError):
        SequenceCounter(10, start=12)

    counter = SequenceCounter(10)
    with pytest.raises(ConfigError):
        counter.force(-1)
    assert counter.current() == 0


def test_module_level_generate_sequence_no():
    identifier = generate_sequence_no()

    assert len(identifier) == 27
    assert identifier.isdigit()
    assert parse_identifier(identifier).counter <= 1000


def test_build_generator_seeded_source_is_reproducible():
    config = GeneratorConfig(max_per_msec_size=99, random_source="seeded", seed=7)
    first = build_generator(config)
    second = build_generator(config)
    first.clock = second.clock = lambda: FROZEN

    assert [first.generate_sequence_no() for _ in range(5)] == [second.generate_sequence_no() for _ in range(5)]
    assert first.max_per_msec_size == 99
    assert first.identifier_length == 25
