"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from seqgen.common.constants import DEFAULT_MAX_PER_MSEC_SIZE
from seqgen.common.errors import ConfigError
from seqgen.common.fs import read_yaml
from seqgen.common.schema import validate_generator_config

CONFIG_FILENAME = "generator.yml"


@dataclass(frozen=True)
class GeneratorConfig:
    max_per_msec_size: int = DEFAULT_MAX_PER_MSEC_SIZE
    clock: str = "local"
    random_source: str = "system"
    seed: int | None = None
    max_attempts: int = 3
    initial_wait: float = 0.0
    max_wait: float = 0.01


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> Any:
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def config_from_mapping(cfg: dict, *, allow_unknown: bool = False) -> GeneratorConfig:
    cfg = validate_generator_config(cfg, allow_unknown=allow_unknown)
    generator = cfg["generator"]
    retry = cfg["retry"]
    return GeneratorConfig(
        max_per_msec_size=generator["max_per_msec_size"],
        clock=generator["clock"],
        random_source=generator["random_source"],
        seed=generator.get("seed"),
        max_attempts=retry["max_attempts"],
        initial_wait=float(retry["initial_wait"]),
        max_wait=float(retry["max_wait"]),
    )


def load_generator_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> GeneratorConfig:
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME
    return config_from_mapping(_load_yaml_with_overlay(path, overlay_path), allow_unknown=allow_unknown)
