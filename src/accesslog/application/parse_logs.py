"""
Parse logs use case.

Runs every line of a source through a parser and applies the caller's
policy for lines that fail.
"""

from enum import Enum
from typing import Iterator

from accesslog.application.ports import LineParserPort, LogSourcePort
from accesslog.core.exceptions import ParseError
from accesslog.core.models import LogRecord, ParseFailure, ParseResult
from accesslog.parsers import default_parser

__all__ = ["ErrorPolicy", "ParseLogsUseCase"]


class ErrorPolicy(Enum):
    """What to do with a line that fails to parse."""
    SKIP = "skip"
    ABORT = "abort"


class ParseLogsUseCase:
    """
    Use case: Parse every line of a source into LogRecords.

    With ErrorPolicy.SKIP failing lines are collected in `failures` and
    parsing continues; with ErrorPolicy.ABORT the first ParseError is
    raised with its line number attached. Blank lines are ignored.

    Example:
        source = FileStreamSource("/var/log/apache2/access.log")
        use_case = ParseLogsUseCase(source=source)

        for record in use_case.execute():
            print(record.remote_host, record.response_code)

        print(f"{len(use_case.failures)} malformed lines")
    """

    def __init__(
        self,
        source: LogSourcePort,
        parser: LineParserPort | None = None,
        error_policy: ErrorPolicy = ErrorPolicy.SKIP,
    ):
        """
        Initialize the use case.

        Args:
            source: Log source adapter (file, stdin, etc.)
            parser: Line parser, defaults to the shared strict LogLineParser
            error_policy: Skip or abort on malformed lines
        """
        self.source = source
        self.parser = parser or default_parser
        self.error_policy = ErrorPolicy(error_policy)
        self.failures: list[ParseFailure] = []

    def execute(self) -> Iterator[LogRecord]:
        """
        Execute the parse logs use case.

        Yields:
            LogRecord for each line that parses

        Raises:
            ParseError: First failure, when the policy is ABORT
        """
        self.failures = []

        for line_number, line in enumerate(self.source.read_lines(), 1):
            if not line.strip():
                continue
            try:
                yield self.parser.parse(line)
            except ParseError as e:
                e.with_line_number(line_number)
                if self.error_policy is ErrorPolicy.ABORT:
                    raise
                self.failures.append(
                    ParseFailure(line_number=line_number, line=line, error=e)
                )

    def collect(self) -> ParseResult:
        """Run to completion and gather records and failures."""
        records = list(self.execute())
        return ParseResult(
            records=records,
            failures=list(self.failures),
            source_file=self.source.metadata().get("path"),
        )
