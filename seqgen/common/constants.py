"""Application constants."""

DEFAULT_MAX_PER_MSEC_SIZE = 1000
TIMESTAMP_WIDTH = 17
RANDOM_SUFFIX_MIN = 100000
RANDOM_SUFFIX_MAX = 999999
RANDOM_SUFFIX_WIDTH = 6
CLOCK_MODES = ("local", "utc")
RANDOM_SOURCES = ("system", "seeded")
COMMANDS = ("generate", "inspect")
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "event",
    "status",
    "attempt",
    "count",
    "threads",
    "duration_ms",
    "error_code",
    "message",
)
