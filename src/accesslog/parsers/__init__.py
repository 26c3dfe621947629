"""
Access log parsers.

Usage:
    from accesslog.parsers import LogLineParser

    parser = LogLineParser()
    record = parser.parse(line)
"""

from accesslog.parsers.clf import LogLineParser
from accesslog.parsers.tokenizer import RawFields, tokenize

__all__ = [
    "LogLineParser",
    "RawFields",
    "tokenize",
    "default_parser",
]

# Shared strict instance; parsers hold no per-call state
default_parser = LogLineParser()
