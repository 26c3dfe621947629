"""
Custom exceptions for accesslog.
"""

from enum import Enum

__all__ = [
    "FailureReason",
    "AccessLogError",
    "ParseError",
    "MalformedLogLineError",
    "InvalidTimestampError",
    "InvalidNumericFieldError",
    "ConfigurationError",
]

# Maximum number of characters of the offending line kept in error details
EXCERPT_LENGTH = 100


class FailureReason(Enum):
    """Why a single line could not be turned into a LogRecord."""
    TOKEN_COUNT = "token_count"
    UNTERMINATED_BRACKET = "unterminated_bracket"
    UNTERMINATED_QUOTE = "unterminated_quote"
    EMPTY_FIELD = "empty_field"
    LINE_TOO_LONG = "line_too_long"
    NON_NUMERIC_FIELD = "non_numeric_field"
    INVALID_TIMESTAMP = "invalid_timestamp"


def excerpt(line: str, length: int = EXCERPT_LENGTH) -> str:
    """Bound a line for inclusion in an error message."""
    return line[:length] + "..." if len(line) > length else line


class AccessLogError(Exception):
    """Base exception for all accesslog errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ParseError(AccessLogError):
    """
    Raised when a line cannot be parsed.

    Attributes:
        line: The full original line
        reason: Machine-readable FailureReason
        line_number: 1-based position in the source, when known
    """

    def __init__(
        self,
        message: str,
        line: str | None = None,
        reason: FailureReason | None = None,
        line_number: int | None = None,
    ):
        details = {}
        if reason is not None:
            details["reason"] = reason.value
        if line is not None:
            details["line"] = excerpt(line)
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__(message, details)
        self.line = line
        self.reason = reason
        self.line_number = line_number

    def with_line_number(self, line_number: int) -> "ParseError":
        """Attach the source position once the caller knows it."""
        self.line_number = line_number
        self.details["line_number"] = line_number
        return self


class MalformedLogLineError(ParseError):
    """Raised when a line does not tokenize into the common or combined shape."""


class InvalidTimestampError(ParseError):
    """Raised when the bracketed timestamp does not match dd/MMM/yyyy:HH:mm:ss ±HHMM."""

    def __init__(
        self,
        message: str,
        value: str,
        line: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(
            message,
            line=line,
            reason=FailureReason.INVALID_TIMESTAMP,
            line_number=line_number,
        )
        self.value = value
        self.details["timestamp"] = value


class InvalidNumericFieldError(ParseError):
    """Raised when the response code or object size is not a base-10 integer."""

    def __init__(
        self,
        field: str,
        value: str,
        line: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(
            f"Field '{field}' is not an integer: {value!r}",
            line=line,
            reason=FailureReason.NON_NUMERIC_FIELD,
            line_number=line_number,
        )
        self.field = field
        self.value = value
        self.details["field"] = field


class ConfigurationError(AccessLogError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key
