"""
Output formatters for CLI.
"""

import csv
import json
from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from accesslog.core.models import LogRecord, ParseFailure
from accesslog.core.security import sanitize_csv_cell
from accesslog.core.timestamps import format_instant

__all__ = [
    "render_records",
    "render_table",
    "render_json",
    "render_csv",
    "render_compact",
    "render_failures",
    "status_style",
]


def status_style(status: int) -> str:
    """Rich style for an HTTP status code."""
    if status >= 500:
        return "red"
    if status >= 400:
        return "yellow"
    if status >= 300:
        return "blue"
    if status >= 200:
        return "green"
    return "white"


def render_records(
    records: list[LogRecord],
    output_format: str,
    console: Console,
) -> None:
    """
    Render records in the specified format.

    Args:
        records: Parsed records to render
        output_format: One of "table", "json", "csv", "compact"
        console: Rich Console for output
    """
    match output_format:
        case "table":
            render_table(records, console)
        case "json":
            render_json(records, console)
        case "csv":
            render_csv(records, console)
        case "compact":
            render_compact(records, console)
        case _:
            render_table(records, console)


def render_table(records: list[LogRecord], console: Console) -> None:
    """Render records as a Rich table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Time (UTC)", style="dim", width=24)
    table.add_column("Host", width=20)
    table.add_column("User", width=10)
    table.add_column("Request", overflow="fold")
    table.add_column("Status", justify="right", width=6)
    table.add_column("Size", justify="right", width=10)

    for record in records:
        style = status_style(record.response_code)

        request = record.request_line
        if len(request) > 200:
            request = request[:197] + "..."

        table.add_row(
            format_instant(record.finished_processing_timestamp),
            escape(record.remote_host[:20]),
            escape(record.user_identity),
            escape(request),
            f"[{style}]{record.response_code}[/{style}]",
            str(record.object_size),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(records)} records[/dim]")


def render_json(records: list[LogRecord], console: Console) -> None:
    """Render records as JSON."""
    output = [record.to_dict() for record in records]
    console.print(json.dumps(output, indent=2), markup=False, highlight=False, soft_wrap=True)


def render_csv(records: list[LogRecord], console: Console) -> None:
    """Render records as CSV."""
    fieldnames = [
        "remote_host",
        "client_identity",
        "user_identity",
        "finished_processing_timestamp",
        "request_line",
        "response_code",
        "object_size",
        "referrer",
        "user_agent",
        "log_format",
    ]

    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for record in records:
        row = record.to_dict()
        for key in (
            "remote_host", "client_identity", "user_identity",
            "request_line", "referrer", "user_agent",
        ):
            row[key] = sanitize_csv_cell(row[key] or "")
        writer.writerow(row)

    console.print(output.getvalue(), end="", markup=False, highlight=False, soft_wrap=True)


def render_compact(records: list[LogRecord], console: Console) -> None:
    """Render records in compact single-line format."""
    for record in records:
        ts = format_instant(record.finished_processing_timestamp)
        style = status_style(record.response_code)
        console.print(
            f"[dim]{ts}[/dim] [{style}]{record.response_code}[/{style}] "
            f"{escape(record.remote_host)} {escape(record.request_line)} ({record.object_size} bytes)",
            highlight=False,
            soft_wrap=True,
        )


def render_failures(failures: list[ParseFailure], console: Console, source: str = "") -> None:
    """Print one line per malformed input line."""
    prefix = f"{source}:" if source else "line "
    for failure in failures:
        reason = failure.reason.value if failure.reason else "error"
        console.print(
            f"[red]{escape(prefix)}{failure.line_number}[/red] [yellow]{reason}[/yellow] "
            f"{escape(failure.error.message)}",
            soft_wrap=True,
            highlight=False,
        )
