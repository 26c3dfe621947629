"""
CLI command implementations.

Wires line sources and the parser into the application use case and
renders the results.
"""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from accesslog.application.parse_logs import ErrorPolicy, ParseLogsUseCase
from accesslog.core.exceptions import ParseError
from accesslog.core.models import LogRecord, ParseResult
from accesslog.infrastructure import FileStreamSource, StdinStreamSource
from accesslog.parsers import LogLineParser
from accesslog.cli.output import render_failures, render_records

__all__ = ["create_source", "parse_command", "check_command"]


def create_source(file_path: str | None):
    """
    Create appropriate source adapter for the input.

    Args:
        file_path: Path to file, or None / "-" for stdin

    Returns:
        Source adapter instance
    """
    if file_path is None or file_path == "-":
        return StdinStreamSource()
    return FileStreamSource(Path(file_path))


def _inputs(files: tuple[str, ...], error_console: Console) -> list[str | None] | None:
    """Resolve the inputs to read; None when there is nothing to read."""
    if files:
        return list(files)
    if sys.stdin.isatty():
        error_console.print("[red]Error:[/red] No files specified")
        return None
    return [None]


def parse_command(
    files: tuple[str, ...],
    output_format: str,
    on_error: str,
    dash_as_zero: bool,
    min_status: int | None,
    limit: int | None,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the parse command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    inputs = _inputs(files, error_console)
    if inputs is None:
        return 1

    parser = LogLineParser(dash_as_zero=dash_as_zero)
    policy = ErrorPolicy(on_error)
    all_records: list[LogRecord] = []

    for file_path in inputs:
        name = file_path or "<stdin>"
        try:
            use_case = ParseLogsUseCase(
                source=create_source(file_path),
                parser=parser,
                error_policy=policy,
            )
            all_records.extend(use_case.execute())
        except FileNotFoundError as e:
            error_console.print(f"[red]Error:[/red] {escape(str(e))}")
            continue
        except ParseError as e:
            error_console.print(
                f"[red]Parse error in {escape(name)}:[/red] {escape(str(e))}"
            )
            return 1

        if use_case.failures and not quiet:
            error_console.print(
                f"[yellow]Skipped {len(use_case.failures)} malformed "
                f"line(s) in {escape(name)}[/yellow]"
            )

    result = ParseResult(records=all_records).filter(min_status=min_status)
    records = result.records
    if limit:
        records = records[:limit]

    if records:
        render_records(records, output_format, console)
    elif not quiet:
        console.print("[yellow]No matching records found.[/yellow]")

    return 0


def check_command(
    files: tuple[str, ...],
    dash_as_zero: bool,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the check command.

    Lists every malformed line with its reason and summarizes each input.

    Returns:
        Exit code (0 = every line parsed, 1 = malformed lines or no input)
    """
    inputs = _inputs(files, error_console)
    if inputs is None:
        return 1

    parser = LogLineParser(dash_as_zero=dash_as_zero)
    total_failures = 0

    for file_path in inputs:
        name = file_path or "<stdin>"
        try:
            use_case = ParseLogsUseCase(
                source=create_source(file_path),
                parser=parser,
                error_policy=ErrorPolicy.SKIP,
            )
            result = use_case.collect()
        except FileNotFoundError as e:
            error_console.print(f"[red]Error:[/red] {escape(str(e))}")
            total_failures += 1
            continue

        render_failures(result.failures, console, source=name)
        total_failures += result.failure_count

        if not quiet:
            console.print(
                f"[bold]{escape(name)}[/bold]: {result.record_count} records "
                f"([cyan]{result.common_count}[/cyan] common, "
                f"[cyan]{result.combined_count}[/cyan] combined), "
                f"[{'red' if result.failure_count else 'green'}]"
                f"{result.failure_count} malformed[/]",
                highlight=False,
                soft_wrap=True,
            )

    return 1 if total_failures else 0
