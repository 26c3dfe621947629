"""
Port interfaces for the application layer.

These are the interfaces that infrastructure adapters must implement.
They define the contract between use cases and the outside world.
"""

from typing import Iterator, Protocol, runtime_checkable

from accesslog.core.models import LogRecord

__all__ = [
    "LogSourcePort",
    "LineParserPort",
]


@runtime_checkable
class LogSourcePort(Protocol):
    """
    Port for log source adapters.

    Implementations provide raw lines from files, stdin or any other
    reader. Chunking and newline handling belong to the source.
    """

    def read_lines(self) -> Iterator[str]:
        """Read raw log lines from the source."""
        ...

    def metadata(self) -> dict[str, str]:
        """Get source metadata (path, type, size, etc.)."""
        ...


@runtime_checkable
class LineParserPort(Protocol):
    """Port for parsers turning one line into one LogRecord."""

    def parse(self, line: str) -> LogRecord:
        """Parse a single log line, raising ParseError on failure."""
        ...
