"""
Application layer for accesslog.

Use cases that drive line sources through the parser.
"""

from accesslog.application.ports import LineParserPort, LogSourcePort
from accesslog.application.parse_logs import ErrorPolicy, ParseLogsUseCase

__all__ = [
    "LogSourcePort",
    "LineParserPort",
    "ErrorPolicy",
    "ParseLogsUseCase",
]
