"""
Main CLI entry point for accesslog.
"""

import click
from rich.console import Console

from accesslog import __version__

console = Console()
error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__, prog_name="accesslog")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx: click.Context, quiet: bool) -> None:
    """
    accesslog - Apache access log parser

    Parse and validate Common and Combined Log Format lines.

    Examples:

    \b
        accesslog parse access.log
        accesslog parse --output json --min-status 500 access.log
        accesslog check access.log other_vhosts_access.log
        tail -n 100 access.log | accesslog parse --output compact
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["error_console"] = error_console


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["table", "json", "csv", "compact"]),
    default="table",
    help="Output format (default: table)"
)
@click.option(
    "--on-error",
    type=click.Choice(["skip", "abort"]),
    default="skip",
    help="Skip malformed lines or stop at the first one (default: skip)"
)
@click.option(
    "--dash-as-zero", is_flag=True,
    help="Accept '-' as 0 for response code and object size"
)
@click.option(
    "--min-status", type=click.IntRange(min=0),
    help="Only show records with at least this response code"
)
@click.option(
    "--limit", "-n", type=click.IntRange(min=1),
    help="Limit number of records to display"
)
@click.pass_context
def parse(
    ctx: click.Context,
    files: tuple[str, ...],
    output_format: str,
    on_error: str,
    dash_as_zero: bool,
    min_status: int | None,
    limit: int | None,
) -> None:
    """
    Parse access log files and display the records.

    Reads stdin when no files are given. Timestamps are shown in UTC.

    Examples:

    \b
        accesslog parse access.log
        accesslog parse --on-error abort access.log
        accesslog parse --output csv access.log > requests.csv
    """
    from accesslog.cli.commands import parse_command

    exit_code = parse_command(
        files=files,
        output_format=output_format,
        on_error=on_error,
        dash_as_zero=dash_as_zero,
        min_status=min_status,
        limit=limit,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--dash-as-zero", is_flag=True,
    help="Accept '-' as 0 for response code and object size"
)
@click.pass_context
def check(
    ctx: click.Context,
    files: tuple[str, ...],
    dash_as_zero: bool,
) -> None:
    """
    Validate access log files.

    Prints every malformed line with its line number and reason, then a
    per-file summary. Exits with status 1 if any line is malformed.

    Examples:

    \b
        accesslog check access.log
        accesslog -q check /var/log/apache2/*.log
    """
    from accesslog.cli.commands import check_command

    exit_code = check_command(
        files=files,
        dash_as_zero=dash_as_zero,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


if __name__ == "__main__":
    cli()
