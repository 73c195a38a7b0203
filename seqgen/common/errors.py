"""Domain errors and failure typing."""


class SequenceError(Exception):
    """Base class for sequence generator failures."""

    error_code = "SEQUENCE_ERROR"


class ConfigError(SequenceError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ContractError(SequenceError):
    """Raised when a composed identifier breaks the fixed-width digit contract."""

    error_code = "CONTRACT_ERROR"


class GenerationError(SequenceError):
    """Raised for composition failures that are safe to retry."""

    error_code = "GENERATION_ERROR"


class ClockFormatError(GenerationError):
    """Raised when the clock cannot be read or rendered as a timestamp."""

    error_code = "CLOCK_FORMAT_FAILURE"


class RandomSourceError(GenerationError):
    """Raised when the random source is unavailable or misbehaves."""

    error_code = "RANDOM_SOURCE_FAILURE"


class IdentifierFormatError(SequenceError):
    """Raised when an identifier cannot be decomposed into its segments."""

    error_code = "IDENTIFIER_FORMAT_ERROR"
