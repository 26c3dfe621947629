"""
Infrastructure layer for accesslog.

Adapters implementing the application ports.
"""

from accesslog.infrastructure.sources import FileStreamSource, StdinStreamSource

__all__ = [
    "FileStreamSource",
    "StdinStreamSource",
]
