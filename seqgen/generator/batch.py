"""Concurrent batch generation and batch summaries."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass

from seqgen.common.errors import ConfigError
from seqgen.generator.identifier import is_well_formed
from seqgen.generator.retrying import RetryConfig, generate_with_retry
from seqgen.generator.sequence import SequenceGenerator


@dataclass(frozen=True)
class BatchSummary:
    total: int
    unique: int
    malformed: int
    threads: int
    per_thread: int
    duration_ms: int
    max_per_msec_size: int

    @property
    def duplicates(self) -> int:
        return self.total - self.unique

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["duplicates"] = self.duplicates
        return payload


def _generate_many(generator: SequenceGenerator, count: int, retry_config: RetryConfig | None) -> list[str]:
    return [generate_with_retry(generator, retry_config) for _ in range(count)]


def generate_concurrently(
    generator: SequenceGenerator,
    threads: int,
    per_thread: int,
    *,
    retry_config: RetryConfig | None = None,
) -> list[str]:
    if threads < 1:
        raise ConfigError(f"threads must be >= 1, got {threads}")
    if per_thread < 1:
        raise ConfigError(f"per_thread must be >= 1, got {per_thread}")

    if threads == 1:
        return _generate_many(generator, per_thread, retry_config)

    with ThreadPoolExecutor(max_workers=threads, thread_name_prefix="seqgen") as pool:
        futures = [pool.submit(_generate_many, generator, per_thread, retry_config) for _ in range(threads)]
        # result() re-raises the first worker failure
        return [identifier for future in futures for identifier in future.result()]


def summarise_batch(
    identifiers: list[str],
    *,
    threads: int,
    per_thread: int,
    started_at: float,
    max_per_msec_size: int,
) -> BatchSummary:
    return BatchSummary(
        total=len(identifiers),
        unique=len(set(identifiers)),
        malformed=sum(1 for value in identifiers if not is_well_formed(value, max_per_msec_size)),
        threads=threads,
        per_thread=per_thread,
        duration_ms=int((time.monotonic() - started_at) * 1000),
        max_per_msec_size=max_per_msec_size,
    )
