"""
Source adapters for reading access-log lines.
"""

from accesslog.infrastructure.sources.file_source import FileStreamSource
from accesslog.infrastructure.sources.stdin_source import StdinStreamSource

__all__ = [
    "FileStreamSource",
    "StdinStreamSource",
]
