"""
Field tokenizer for Common and Combined Log Format lines.

The format mixes three kinds of delimiting:

    host ident authuser [timestamp] "request" status bytes ["referrer" "user-agent"]

bare tokens end at a space, the timestamp runs to the first ']' and keeps
its internal space, and quoted fields run to the next '"'. A regex with
lazy groups accepts too much (a missing ']' lets the match slide into the
request), so lines are scanned left to right once and every failure is
reported at the position it happens.
"""

from dataclasses import dataclass

from accesslog.core.exceptions import FailureReason, MalformedLogLineError
from accesslog.core.models import LogFormat

__all__ = ["RawFields", "tokenize"]

SEPARATOR = " "

SHAPE_HINT = "expected 8 fields (common) or 10 fields (combined)"


@dataclass(frozen=True)
class RawFields:
    """Unvalidated field text, delimiters removed."""
    remote_host: str
    client_identity: str
    user_identity: str
    timestamp: str
    request_line: str
    response_code: str
    object_size: str
    referrer: str | None = None
    user_agent: str | None = None

    @property
    def log_format(self) -> LogFormat:
        if self.referrer is None:
            return LogFormat.COMMON
        return LogFormat.COMBINED


class _Scanner:
    """Cursor over a single line."""

    def __init__(self, line: str):
        self.line = line
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.line)

    def fail(self, message: str, reason: FailureReason) -> MalformedLogLineError:
        return MalformedLogLineError(message, line=self.line, reason=reason)

    def separator(self, after: str) -> None:
        """Consume one or more spaces that must follow the field `after`."""
        start = self.pos
        while not self.at_end() and self.line[self.pos] == SEPARATOR:
            self.pos += 1
        if self.at_end():
            raise self.fail(
                f"Line ended after {after}; {SHAPE_HINT}",
                FailureReason.TOKEN_COUNT,
            )
        if self.pos == start:
            raise self.fail(
                f"Expected a space after {after} at column {self.pos + 1}",
                FailureReason.TOKEN_COUNT,
            )

    def bare(self, name: str) -> str:
        """Read a space-delimited token."""
        if self.at_end():
            raise self.fail(
                f"Line ended before {name}; {SHAPE_HINT}",
                FailureReason.TOKEN_COUNT,
            )
        end = self.line.find(SEPARATOR, self.pos)
        if end == -1:
            end = len(self.line)
        token = self.line[self.pos:end]
        if not token:
            raise self.fail(f"Empty {name}", FailureReason.EMPTY_FIELD)
        self.pos = end
        return token

    def delimited(self, opening: str, closing: str, name: str) -> str:
        """Read a field wrapped in `opening`...`closing`, returning its content."""
        if self.line[self.pos] != opening:
            raise self.fail(
                f"Expected '{opening}' to open {name} at column {self.pos + 1}; {SHAPE_HINT}",
                FailureReason.TOKEN_COUNT,
            )
        end = self.line.find(closing, self.pos + 1)
        if end == -1:
            reason = (
                FailureReason.UNTERMINATED_BRACKET
                if opening == "["
                else FailureReason.UNTERMINATED_QUOTE
            )
            raise self.fail(
                f"Unterminated {name}: no closing '{closing}' after column {self.pos + 1}",
                reason,
            )
        content = self.line[self.pos + 1:end]
        self.pos = end + 1
        if not self.at_end() and self.line[self.pos] != SEPARATOR:
            raise self.fail(
                f"Expected a space after {name} at column {self.pos + 1}",
                FailureReason.TOKEN_COUNT,
            )
        return content

    def remaining(self) -> list[tuple[str, bool]]:
        """
        Read every token left on the line.

        Returns:
            (content, was_quoted) pairs
        """
        tokens: list[tuple[str, bool]] = []
        while True:
            start = self.pos
            while not self.at_end() and self.line[self.pos] == SEPARATOR:
                self.pos += 1
            if self.at_end():
                if self.pos != start:
                    raise self.fail(
                        f"Trailing whitespace at column {start + 1}",
                        FailureReason.TOKEN_COUNT,
                    )
                return tokens
            if self.line[self.pos] == '"':
                tokens.append((self.delimited('"', '"', "trailing quoted field"), True))
            else:
                tokens.append((self.bare("trailing field"), False))


def tokenize(line: str) -> RawFields:
    """
    Split one access-log line into its raw fields.

    Args:
        line: A single line; one trailing newline is tolerated

    Returns:
        RawFields with referrer/user_agent set only for Combined lines

    Raises:
        MalformedLogLineError: On wrong field count, unterminated bracket
            or quote, or an empty required field
    """
    line = line.removesuffix("\n").removesuffix("\r")
    s = _Scanner(line)

    remote_host = s.bare("remote host")
    s.separator("remote host")
    client_identity = s.bare("client identity")
    s.separator("client identity")
    user_identity = s.bare("user identity")
    s.separator("user identity")
    timestamp = s.delimited("[", "]", "timestamp")
    s.separator("timestamp")
    request_line = s.delimited('"', '"', "request line")
    if not request_line:
        raise s.fail("Empty request line", FailureReason.EMPTY_FIELD)
    s.separator("request line")
    response_code = s.bare("response code")
    s.separator("response code")
    object_size = s.bare("object size")

    fields = RawFields(
        remote_host=remote_host,
        client_identity=client_identity,
        user_identity=user_identity,
        timestamp=timestamp,
        request_line=request_line,
        response_code=response_code,
        object_size=object_size,
    )

    trailing = s.remaining()
    if not trailing:
        return fields

    if len(trailing) == 2 and all(quoted for _, quoted in trailing):
        (referrer, _), (user_agent, _) = trailing
        return RawFields(
            remote_host=remote_host,
            client_identity=client_identity,
            user_identity=user_identity,
            timestamp=timestamp,
            request_line=request_line,
            response_code=response_code,
            object_size=object_size,
            referrer=referrer,
            user_agent=user_agent,
        )

    unquoted = sum(1 for _, quoted in trailing if not quoted)
    message = f"Found {LogFormat.COMMON.field_count + len(trailing)} fields; {SHAPE_HINT}"
    if unquoted:
        message += f" ({unquoted} trailing field(s) not quoted)"
    raise s.fail(message, FailureReason.TOKEN_COUNT)
