"""
Pytest fixtures for accesslog tests.
"""

import pytest

from accesslog.parsers import LogLineParser


COMMON_LINE = (
    '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] '
    '"GET /apache_pb.gif HTTP/1.0" 200 2326'
)

GOOGLEBOT_USER_AGENT = (
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
)

COMBINED_LINE = (
    'crawl-66-249-72-68.googlebot.com - - [22/Jan/2012:23:53:11 +0100] '
    '"GET /index.html" 404 1023 "-" '
    f'"{GOOGLEBOT_USER_AGENT}"'
)


@pytest.fixture
def parser() -> LogLineParser:
    """Strict parser with default options."""
    return LogLineParser()


@pytest.fixture
def common_line() -> str:
    """The canonical Common Log Format example from the Apache docs."""
    return COMMON_LINE


@pytest.fixture
def combined_line() -> str:
    """A Combined Log Format line with an absent referrer."""
    return COMBINED_LINE


@pytest.fixture
def sample_common_logs() -> list[str]:
    """Sample Common Log Format lines."""
    return [
        '192.168.1.100 - - [27/Jan/2026:10:15:32 +0000] "GET /index.html HTTP/1.1" 200 2326',
        '192.168.1.101 - admin [27/Jan/2026:10:15:33 +0000] "POST /api/users HTTP/1.1" 201 156',
        '192.168.1.102 - - [27/Jan/2026:10:15:34 +0000] "GET /missing.html HTTP/1.1" 404 512',
    ]


@pytest.fixture
def sample_combined_logs() -> list[str]:
    """Sample Combined Log Format lines."""
    return [
        '192.168.1.100 - - [27/Jan/2026:10:15:32 +0000] "GET /index.html HTTP/1.1" 200 2326 "http://example.com/" "Mozilla/5.0 (X11; Linux x86_64)"',
        '192.168.1.101 - admin [27/Jan/2026:10:15:33 +0000] "POST /api/users HTTP/1.1" 201 156 "-" "curl/7.68.0"',
        '192.168.1.103 - - [27/Jan/2026:10:15:35 +0000] "GET /api/data HTTP/1.1" 500 128 "-" "python-requests/2.28.0"',
        '10.0.0.1 - - [27/Jan/2026:10:15:36 +0000] "GET /favicon.ico HTTP/1.1" 304 0 "-" "-"',
    ]


@pytest.fixture
def malformed_line() -> str:
    """A line whose timestamp bracket is never closed."""
    return '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700 "GET /apache_pb.gif HTTP/1.0" 200 2326'


@pytest.fixture
def access_log_file(tmp_path, sample_common_logs, sample_combined_logs):
    """Access log mixing both formats, all lines valid."""
    log_file = tmp_path / "access.log"
    log_file.write_text("\n".join(sample_common_logs + sample_combined_logs) + "\n")
    return log_file


@pytest.fixture
def mixed_log_file(tmp_path, common_line, combined_line, malformed_line):
    """Access log with a malformed second line and a blank line."""
    log_file = tmp_path / "mixed.log"
    log_file.write_text(
        "\n".join([common_line, malformed_line, "", combined_line]) + "\n"
    )
    return log_file
