"""
Apache access log parser (Common Log Format and Combined Log Format).
"""

import re
from typing import Iterable, Iterator

from accesslog.core.exceptions import (
    ConfigurationError,
    FailureReason,
    InvalidNumericFieldError,
    InvalidTimestampError,
    MalformedLogLineError,
    ParseError,
)
from accesslog.core.models import LogFormat, LogRecord
from accesslog.core.security import MAX_LINE_LENGTH, LineTooLongError, validate_line_length
from accesslog.core.timestamps import parse_clf_timestamp
from accesslog.parsers.tokenizer import tokenize

__all__ = ["LogLineParser"]

INTEGER = re.compile(r"[+-]?[0-9]+")

ABSENT = "-"


class LogLineParser:
    """
    Parse Apache Common and Combined Log Format lines into LogRecords.

    Common format:
        127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326

    Combined format adds quoted referrer and user agent:
        ... 200 2326 "http://www.example.com/start.html" "Mozilla/4.08"

    The parser keeps no state between calls, so one instance can be shared
    across threads.

    Example:
        parser = LogLineParser()
        record = parser.parse(line)
        record.finished_processing_timestamp  # aware datetime in UTC
    """

    name = "clf"
    supported_formats = [LogFormat.COMMON.value, LogFormat.COMBINED.value]

    def __init__(
        self,
        dash_as_zero: bool = False,
        max_line_length: int = MAX_LINE_LENGTH,
    ):
        """
        Initialize the parser.

        Args:
            dash_as_zero: Accept "-" as 0 for response code and object size
                (Apache logs "-" for responses without a body)
            max_line_length: Lines longer than this many bytes are rejected
        """
        if max_line_length <= 0:
            raise ConfigurationError(
                f"max_line_length must be positive, got {max_line_length}",
                config_key="max_line_length",
            )
        self.dash_as_zero = dash_as_zero
        self.max_line_length = max_line_length

    def parse(self, line: str) -> LogRecord:
        """
        Parse a single access-log line.

        Args:
            line: Raw log line

        Returns:
            LogRecord with every field populated

        Raises:
            MalformedLogLineError: Line matches neither recognized shape
            InvalidTimestampError: Bracketed timestamp is unparseable
            InvalidNumericFieldError: Response code or object size is not an integer
        """
        try:
            validate_line_length(line, self.max_line_length)
        except LineTooLongError as e:
            raise MalformedLogLineError(
                e.message, line=line, reason=FailureReason.LINE_TOO_LONG
            ) from e

        raw = tokenize(line)

        try:
            timestamp = parse_clf_timestamp(raw.timestamp)
        except InvalidTimestampError as e:
            raise InvalidTimestampError(e.message, e.value, line=line) from e

        response_code = self._parse_integer("response_code", raw.response_code, line)
        object_size = self._parse_integer("object_size", raw.object_size, line)

        return LogRecord(
            remote_host=raw.remote_host,
            client_identity=raw.client_identity,
            user_identity=raw.user_identity,
            finished_processing_timestamp=timestamp,
            request_line=raw.request_line,
            response_code=response_code,
            object_size=object_size,
            referrer=self._optional(raw.referrer),
            user_agent=self._optional(raw.user_agent),
            log_format=raw.log_format,
        )

    def detect_format(self, line: str) -> LogFormat:
        """Parse a line and report which of the two shapes it has."""
        return self.parse(line).log_format

    def can_parse(self, sample: list[str]) -> float:
        """
        Determine confidence that the sample is an access log.

        Returns:
            Fraction of non-blank sample lines that parse, 0.0 to 1.0
        """
        lines = [line for line in sample if line.strip()]
        if not lines:
            return 0.0

        parsed = 0
        for line in lines:
            try:
                self.parse(line)
            except ParseError:
                continue
            parsed += 1
        return parsed / len(lines)

    def parse_stream(self, lines: Iterable[str]) -> Iterator[LogRecord]:
        """
        Parse a stream of lines, skipping blank ones.

        The first failing line raises, with its 1-based line number attached.

        Yields:
            LogRecord for each non-blank line
        """
        for line_number, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                yield self.parse(line)
            except ParseError as e:
                raise e.with_line_number(line_number)

    def _parse_integer(self, field: str, value: str, line: str) -> int:
        """Parse a base-10 integer field."""
        if self.dash_as_zero and value == ABSENT:
            return 0
        if not INTEGER.fullmatch(value):
            raise InvalidNumericFieldError(field, value, line=line)
        try:
            return int(value)
        except ValueError as e:
            # int() refuses digit strings past sys.get_int_max_str_digits()
            raise InvalidNumericFieldError(field, value, line=line) from e

    @staticmethod
    def _optional(value: str | None) -> str | None:
        """Map a trailing quoted field to None when it is absent or "-"."""
        if value is None or value == ABSENT:
            return None
        return value
