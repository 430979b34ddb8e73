"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.panel import Panel

from ..core.models import NextBusResult

console = Console()


def format_result_text(result: NextBusResult) -> str:
    """Format a result as "<N> Minutes" (empty when nothing is scheduled)."""
    return result.summary


def format_result_json(result: NextBusResult) -> str:
    """Format a result as JSON."""
    data = result.model_dump(mode="json")
    data["summary"] = result.summary
    return json.dumps(data, ensure_ascii=False, indent=2)


def format_result_detailed(result: NextBusResult) -> None:
    """Display a result with the resolved route, direction and stop."""
    summary_text = f"""[bold]Route:[/bold] {result.route.label} ({result.route.id})
[bold]Direction:[/bold] {result.direction.name} ({result.direction.id})
[bold]Stop:[/bold] {result.stop.description} ({result.stop.code})"""

    departure = result.departure
    if departure is None:
        summary_text += "\n[yellow]No upcoming departures[/yellow]"
    else:
        summary_text += f"\n[bold]Next bus:[/bold] [green]{result.summary}[/green]"
        if departure.description:
            summary_text += f"\n[bold]Headsign:[/bold] {departure.description}"
        if departure.departure_text:
            realtime = " (real-time)" if departure.actual else ""
            summary_text += (
                f"\n[bold]Board:[/bold] {departure.departure_text}{realtime}"
            )

    console.print(Panel(summary_text, title="Next Bus", border_style="blue"))
