"""
Stdin source adapter for accesslog.

Provides streaming input from standard input for piped data.
"""

import sys
from typing import Iterator, TextIO

__all__ = ["StdinStreamSource"]


class StdinStreamSource:
    """
    Streaming source adapter for stdin.

    Example:
        # cat access.log | accesslog parse
        source = StdinStreamSource()
        for line in source.read_lines():
            process(line)
    """

    def __init__(self, stream: TextIO | None = None):
        """
        Initialize stdin stream source.

        Args:
            stream: Text stream to read, defaults to sys.stdin at read time
        """
        self.stream = stream
        self._line_count = 0

    def read_lines(self) -> Iterator[str]:
        """
        Read lines from stdin, yielding one at a time.

        Yields:
            Input lines (without trailing newline)
        """
        stream = sys.stdin if self.stream is None else self.stream
        for line in stream:
            self._line_count += 1
            yield line.rstrip("\n\r")

    def metadata(self) -> dict[str, str]:
        """
        Get source metadata.

        Note: The line count is only final once reading completes.
        """
        return {
            "source_type": "stdin",
            "path": "<stdin>",
            "name": "stdin",
            "lines_read": str(self._line_count),
        }
