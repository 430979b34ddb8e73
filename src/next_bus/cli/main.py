"""CLI main entry point for next bus lookups."""

import logging

import click

from .. import __version__
from ..core import DEFAULT_BASE_URL, NexTripClient, NextBusError, NextBusFinder
from ..core.finder import describe_error
from .formatters import format_result_detailed, format_result_json, format_result_text

USAGE = "Not enough arguments. Use: next-bus [BusRoute] [BusStop] [Direction]"


@click.command()
@click.version_option(version=__version__)
@click.argument("args", nargs=-1)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json", "detailed"]),
    default="text",
    help="Output format",
)
@click.option(
    "--timeout",
    "-t",
    type=float,
    default=None,
    help="Request timeout in seconds (waits indefinitely by default)",
)
@click.option("--base-url", default=DEFAULT_BASE_URL, help="NexTrip API root URL")
@click.option("--verbose", "-v", is_flag=True, help="Log API calls and lookups")
def cli(
    args: tuple[str, ...],
    output_format: str,
    timeout: float | None,
    base_url: str,
    verbose: bool,
) -> None:
    """Show minutes until the next bus for a route, stop and direction.

    Examples:
        next-bus "METRO Blue Line" "Target Field" north
        next-bus "METRO Blue Line" "Target Field" north --format detailed
    """
    if len(args) != 3:
        click.echo(USAGE)
        return

    bus_route, bus_stop, direction = args

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    finder = NextBusFinder(NexTripClient(base_url=base_url, timeout=timeout))
    try:
        result = finder.find(bus_route, bus_stop, direction)
    except NextBusError as e:
        click.echo(describe_error(e))
        return

    if output_format == "json":
        click.echo(format_result_json(result))
    elif output_format == "detailed":
        format_result_detailed(result)
    else:
        click.echo(format_result_text(result))


if __name__ == "__main__":
    cli()
