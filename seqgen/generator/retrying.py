"""Bounded retries for transient generation failures."""

from __future__ import annotations

from dataclasses import dataclass

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from seqgen.common.config_loader import GeneratorConfig
from seqgen.common.errors import GenerationError
from seqgen.generator.sequence import SequenceGenerator


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    initial_wait: float = 0.0
    max_wait: float = 0.01

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "RetryConfig":
        return cls(
            max_attempts=config.max_attempts,
            initial_wait=config.initial_wait,
            max_wait=config.max_wait,
        )


def generate_with_retry(generator: SequenceGenerator, retry_config: RetryConfig | None = None) -> str:
    """Generate one identifier, retrying clock and random source failures.

    The last :class:`GenerationError` is re-raised once attempts run out.
    Contract violations are not retried.
    """
    cfg = retry_config or RetryConfig()

    @retry(
        stop=stop_after_attempt(cfg.max_attempts),
        wait=wait_exponential_jitter(
            initial=cfg.initial_wait,
            max=cfg.max_wait,
            jitter=cfg.max_wait,
        ),
        retry=retry_if_exception_type(GenerationError),
        reraise=True,
    )
    def _wrapped() -> str:
        return generator.generate_sequence_no()

    return _wrapped()
