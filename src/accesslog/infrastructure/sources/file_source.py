"""
File source adapter for accesslog.

Reads an access log line by line without loading it into memory.
"""

from pathlib import Path
from typing import Iterator

from accesslog.core.security import check_symlink

__all__ = ["FileStreamSource"]


class FileStreamSource:
    """
    Line-by-line file reader.

    Reads the file once from start to end. Following a growing file is
    left to the caller.

    Example:
        source = FileStreamSource("/var/log/apache2/access.log")
        for line in source.read_lines():
            print(line)
    """

    def __init__(
        self,
        path: str | Path,
        encoding: str = "utf-8",
        errors: str = "replace"
    ):
        """
        Initialize file stream source.

        Args:
            path: Path to log file
            encoding: File encoding (default: utf-8)
            errors: How to handle encoding errors (default: replace)
        """
        self.path = Path(path)
        self.encoding = encoding
        self.errors = errors

        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        check_symlink(self.path)

    def read_lines(self) -> Iterator[str]:
        """
        Read lines from file, yielding one at a time.

        Yields:
            Log lines (without trailing newline)
        """
        with open(
            self.path,
            "r",
            encoding=self.encoding,
            errors=self.errors,
            newline="",
        ) as f:
            for line in f:
                yield line.rstrip("\n\r")

    def metadata(self) -> dict[str, str]:
        """Get source metadata."""
        stat = self.path.stat()
        return {
            "source_type": "file",
            "path": str(self.path),
            "name": self.path.name,
            "size_bytes": str(stat.st_size),
        }
