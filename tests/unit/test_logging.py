import json
import logging
from pathlib import Path

from seqgen.common.constants import JSON_LOG_FIELDS
from seqgen.common.logging import JsonLineFormatter, build_logger, log_event


def test_json_line_formatter_emits_stable_schema():
    record = logging.LogRecord("seqgen.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.event = "GENERATE_START"
    record.count = 5

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["event"] == "GENERATE_START"
    assert payload["count"] == 5
    assert payload["error_code"] is None
    assert set(JSON_LOG_FIELDS) <= set(payload)


def test_build_logger_writes_json_lines_to_file(tmp_path: Path):
    log_path = tmp_path / "logs" / "run-test.log.jsonl"
    logger = build_logger("run-test", level="DEBUG", log_path=log_path)
    try:
        log_event(logger, "generate start", run_id="run-test", event="GENERATE_START", status="ok")
    finally:
        for handler in logger.handlers:
            handler.close()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["run_id"] == "run-test"
