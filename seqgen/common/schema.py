"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from seqgen.common.constants import CLOCK_MODES, RANDOM_SOURCES
from seqgen.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping, got {type(obj).__name__}")
    return obj


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_int(value, ctx: str, minimum: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{ctx} must be an integer")
    if value < minimum:
        raise ConfigError(f"{ctx} must be >= {minimum}")
    return value


def _assert_number(value, ctx: str, minimum: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number")
    if value < minimum:
        raise ConfigError(f"{ctx} must be >= {minimum}")
    return float(value)


def validate_generator_config(cfg, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "generator config")
    _assert_required_keys(cfg, {"generator", "retry"}, "generator config")
    _assert_no_unknown_keys(cfg, {"generator", "retry"}, "generator config", allow_unknown)

    generator = _assert_mapping(cfg["generator"], "generator")
    generator_known = {"max_per_msec_size", "clock", "random_source", "seed"}
    _assert_required_keys(generator, {"max_per_msec_size", "clock", "random_source"}, "generator")
    _assert_no_unknown_keys(generator, generator_known, "generator", allow_unknown)
    _assert_int(generator["max_per_msec_size"], "generator.max_per_msec_size", 1)
    if generator["clock"] not in CLOCK_MODES:
        raise ConfigError(f"generator.clock must be one of {', '.join(CLOCK_MODES)}")
    if generator["random_source"] not in RANDOM_SOURCES:
        raise ConfigError(f"generator.random_source must be one of {', '.join(RANDOM_SOURCES)}")
    seed = generator.get("seed")
    if seed is not None:
        _assert_int(seed, "generator.seed", 0)
        if generator["random_source"] != "seeded":
            raise ConfigError("generator.seed is only valid with random_source: seeded")

    retry = _assert_mapping(cfg["retry"], "retry")
    retry_known = {"max_attempts", "initial_wait", "max_wait"}
    _assert_required_keys(retry, retry_known, "retry")
    _assert_no_unknown_keys(retry, retry_known, "retry", allow_unknown)
    _assert_int(retry["max_attempts"], "retry.max_attempts", 1)
    initial_wait = _assert_number(retry["initial_wait"], "retry.initial_wait", 0.0)
    _assert_number(retry["max_wait"], "retry.max_wait", initial_wait)

    return cfg
