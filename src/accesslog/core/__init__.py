"""
Core data models, errors and helpers for accesslog.
"""

from accesslog.core.models import (
    LogFormat,
    LogRecord,
    ParseFailure,
    ParseResult,
)
from accesslog.core.exceptions import (
    FailureReason,
    AccessLogError,
    ParseError,
    MalformedLogLineError,
    InvalidTimestampError,
    InvalidNumericFieldError,
    ConfigurationError,
)
from accesslog.core.timestamps import (
    parse_clf_timestamp,
    format_instant,
    parse_instant,
)
from accesslog.core.security import (
    MAX_LINE_LENGTH,
    LineTooLongError,
    SecurityValidationError,
    validate_line_length,
    sanitize_csv_cell,
    check_symlink,
)

__all__ = [
    "LogFormat",
    "LogRecord",
    "ParseFailure",
    "ParseResult",
    "FailureReason",
    "AccessLogError",
    "ParseError",
    "MalformedLogLineError",
    "InvalidTimestampError",
    "InvalidNumericFieldError",
    "ConfigurationError",
    # Timestamps
    "parse_clf_timestamp",
    "format_instant",
    "parse_instant",
    # Security
    "MAX_LINE_LENGTH",
    "LineTooLongError",
    "SecurityValidationError",
    "validate_line_length",
    "sanitize_csv_cell",
    "check_symlink",
]
