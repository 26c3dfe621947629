"""
accesslog - Strict parser for Apache Common and Combined Log Format lines.

Usage:
    from accesslog import parse_line, parse_file, LogRecord

    # Parse one line
    record = parse_line(
        '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326'
    )
    record.finished_processing_timestamp  # 2000-10-10 20:55:36+00:00

    # Parse a file, collecting malformed lines instead of stopping
    result = parse_file("access.log")
    print(result.record_count, result.failure_count)

    # Stream a file, stopping at the first malformed line
    for record in stream_parse("access.log"):
        ...
"""

__version__ = "0.1.0"

from typing import Iterator

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
from accesslog.core.timestamps import parse_clf_timestamp, format_instant
from accesslog.parsers import LogLineParser, default_parser
from accesslog.application import ErrorPolicy, ParseLogsUseCase
from accesslog.infrastructure import FileStreamSource, StdinStreamSource

__all__ = [
    # Version
    "__version__",
    # Core models
    "LogFormat",
    "LogRecord",
    "ParseFailure",
    "ParseResult",
    # Exceptions
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
    # Parsing
    "LogLineParser",
    "ErrorPolicy",
    "ParseLogsUseCase",
    # Sources
    "FileStreamSource",
    "StdinStreamSource",
    # Convenience functions
    "parse_line",
    "parse_file",
    "stream_parse",
]


def parse_line(line: str) -> LogRecord:
    """
    Parse one Common or Combined Log Format line.

    Raises:
        ParseError: MalformedLogLineError, InvalidTimestampError or
            InvalidNumericFieldError describing the first problem found
    """
    return default_parser.parse(line)


def parse_file(
    file_path: str,
    error_policy: ErrorPolicy | str = ErrorPolicy.SKIP,
    dash_as_zero: bool = False,
) -> ParseResult:
    """
    Parse an access log file.

    Args:
        file_path: Path to the log file
        error_policy: "skip" collects malformed lines in the result,
            "abort" raises the first ParseError
        dash_as_zero: Accept "-" as 0 for response code and object size

    Returns:
        ParseResult with records and failures
    """
    use_case = ParseLogsUseCase(
        source=FileStreamSource(file_path),
        parser=LogLineParser(dash_as_zero=dash_as_zero),
        error_policy=ErrorPolicy(error_policy),
    )
    return use_case.collect()


def stream_parse(file_path: str, dash_as_zero: bool = False) -> Iterator[LogRecord]:
    """
    Stream records from an access log file without buffering.

    Stops with a ParseError (line number attached) at the first malformed line.

    Example:
        for record in stream_parse("access.log"):
            if record.response_code >= 500:
                print(record.request_line)
    """
    use_case = ParseLogsUseCase(
        source=FileStreamSource(file_path),
        parser=LogLineParser(dash_as_zero=dash_as_zero),
        error_policy=ErrorPolicy.ABORT,
    )
    yield from use_case.execute()
