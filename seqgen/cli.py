"""CLI entrypoint for the sequence number generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from seqgen.common.config_loader import load_generator_config
from seqgen.common.constants import COMMANDS, DEFAULT_MAX_PER_MSEC_SIZE, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from seqgen.common.errors import SequenceError
from seqgen.common.fs import write_json, write_lines
from seqgen.common.logging import build_logger, log_event
from seqgen.generator.batch import generate_concurrently, summarise_batch
from seqgen.generator.identifier import parse_identifier
from seqgen.generator.retrying import RetryConfig
from seqgen.generator.sequence import build_generator, generate_sequence_no


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("identifier", nargs="?", default=None)
    parser.add_argument("--count", type=int, default=1, help="identifiers per thread")
    parser.add_argument("--threads", type=int, default=1)
    parser.add_argument("--max-per-msec-size", type=int, default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--output", default=None)
    parser.add_argument("--summary", default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def generate_run_id() -> str:
    return f"run-{generate_sequence_no()}"


def run_generate(args: argparse.Namespace, logger: logging.Logger, run_id: str) -> int:
    config = load_generator_config(
        Path(args.config_dir),
        overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
    )
    if args.max_per_msec_size is not None:
        config = replace(config, max_per_msec_size=args.max_per_msec_size)

    generator = build_generator(config, logger=logger)
    started_at = time.monotonic()
    log_event(
        logger,
        "generate start",
        run_id=run_id,
        event="GENERATE_START",
        status="ok",
        count=args.count,
        threads=args.threads,
    )
    identifiers = generate_concurrently(
        generator,
        args.threads,
        args.count,
        retry_config=RetryConfig.from_config(config),
    )
    summary = summarise_batch(
        identifiers,
        threads=args.threads,
        per_thread=args.count,
        started_at=started_at,
        max_per_msec_size=config.max_per_msec_size,
    )

    if args.output:
        write_lines(Path(args.output), identifiers)
    else:
        for identifier in identifiers:
            print(identifier)
    if args.summary:
        write_json(Path(args.summary), {"run_id": run_id, **summary.to_dict()})

    healthy = summary.duplicates == 0 and summary.malformed == 0
    log_event(
        logger,
        "generate end",
        run_id=run_id,
        event="GENERATE_END",
        status="ok" if healthy else "partial",
        count=summary.total,
        threads=args.threads,
        duration_ms=summary.duration_ms,
    )
    return EXIT_SUCCESS if healthy else EXIT_PARTIAL


def run_inspect(args: argparse.Namespace) -> int:
    if not args.identifier:
        raise SequenceError("inspect requires an identifier argument")
    ceiling = args.max_per_msec_size or DEFAULT_MAX_PER_MSEC_SIZE
    parts = parse_identifier(args.identifier, ceiling)
    print(
        json.dumps(
            {
                "identifier": args.identifier,
                "timestamp": parts.timestamp.isoformat(timespec="milliseconds"),
                "counter": parts.counter,
                "suffix": parts.suffix,
            },
            sort_keys=True,
        )
    )
    return EXIT_SUCCESS


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(
        run_id,
        level=args.log_level,
        log_path=Path(args.log_file) if args.log_file else None,
    )

    try:
        if args.command == "inspect":
            return run_inspect(args)
        return run_generate(args, logger, run_id)
    except SequenceError as exc:
        log_event(
            logger,
            f"{args.command} failed: {exc}",
            run_id=run_id,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except Exception:
        logging.getLogger("seqgen").exception("unexpected failure")
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
