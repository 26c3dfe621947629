"""
Core data models for accesslog.

LogRecord is the single value type produced by the parser. Common and
Combined lines share it; the trailing fields are optional.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from accesslog.core.exceptions import FailureReason, ParseError, excerpt
from accesslog.core.timestamps import format_instant, parse_instant

__all__ = [
    "LogFormat",
    "LogRecord",
    "ParseFailure",
    "ParseResult",
]


class LogFormat(Enum):
    """The two recognized access-log line shapes."""
    COMMON = "common"
    COMBINED = "combined"

    @property
    def field_count(self) -> int:
        """Number of logical fields a line of this shape carries."""
        return 8 if self is LogFormat.COMMON else 10


@dataclass(frozen=True)
class LogRecord:
    """
    One parsed access-log line.

    The identity fields keep the literal "-" token, while referrer and
    user_agent use None for a "-" token. CLF overloads the dash: in the
    identity positions it is a value ("no identity"), in the trailing
    positions it means the header was not available.
    """
    remote_host: str
    client_identity: str
    user_identity: str
    finished_processing_timestamp: datetime
    request_line: str
    response_code: int
    object_size: int
    referrer: str | None = None
    user_agent: str | None = None
    log_format: LogFormat = LogFormat.COMMON

    def __post_init__(self):
        if not self.remote_host:
            raise ValueError("remote_host must not be empty")
        if not self.request_line:
            raise ValueError("request_line must not be empty")
        if self.finished_processing_timestamp.utcoffset() != timedelta(0):
            raise ValueError("finished_processing_timestamp must be an aware UTC datetime")
        if self.log_format is LogFormat.COMMON and (
            self.referrer is not None or self.user_agent is not None
        ):
            raise ValueError("common format records carry no referrer or user agent")

    @property
    def is_combined(self) -> bool:
        """Check if this record came from a Combined Log Format line."""
        return self.log_format is LogFormat.COMBINED

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        return {
            "remote_host": self.remote_host,
            "client_identity": self.client_identity,
            "user_identity": self.user_identity,
            "finished_processing_timestamp": format_instant(
                self.finished_processing_timestamp
            ),
            "request_line": self.request_line,
            "response_code": self.response_code,
            "object_size": self.object_size,
            "referrer": self.referrer,
            "user_agent": self.user_agent,
            "log_format": self.log_format.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogRecord":
        """Deserialize from dictionary."""
        return cls(
            remote_host=data["remote_host"],
            client_identity=data["client_identity"],
            user_identity=data["user_identity"],
            finished_processing_timestamp=parse_instant(
                data["finished_processing_timestamp"]
            ),
            request_line=data["request_line"],
            response_code=int(data["response_code"]),
            object_size=int(data["object_size"]),
            referrer=data.get("referrer"),
            user_agent=data.get("user_agent"),
            log_format=LogFormat(data.get("log_format", LogFormat.COMMON.value)),
        )


@dataclass
class ParseFailure:
    """A line that could not be parsed, with its position in the source."""
    line_number: int
    line: str
    error: ParseError

    @property
    def reason(self) -> FailureReason | None:
        return self.error.reason

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "line": excerpt(self.line),
            "reason": self.reason.value if self.reason else None,
            "error": self.error.message,
        }


@dataclass
class ParseResult:
    """Result of parsing a log file or stream."""
    records: list[LogRecord] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)
    source_file: str | None = None

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def common_count(self) -> int:
        return sum(1 for r in self.records if r.log_format is LogFormat.COMMON)

    @property
    def combined_count(self) -> int:
        return sum(1 for r in self.records if r.log_format is LogFormat.COMBINED)

    def filter(self, min_status: int | None = None) -> "ParseResult":
        """Return new ParseResult keeping records at or above min_status."""
        records = self.records
        if min_status is not None:
            records = [r for r in records if r.response_code >= min_status]
        return ParseResult(
            records=records,
            failures=list(self.failures),
            source_file=self.source_file,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "source_file": self.source_file,
            "record_count": self.record_count,
            "failure_count": self.failure_count,
            "common_count": self.common_count,
            "combined_count": self.combined_count,
            "records": [r.to_dict() for r in self.records],
            "failures": [f.to_dict() for f in self.failures],
        }
