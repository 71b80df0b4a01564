"""Trends, streaks, and insights CLI commands."""

import click
from rich.table import Table

from analytics import InsightGenerator, MoodTrends, get_streaks
from analytics.insights import INSIGHT_PERIODS
from cli.utils import console, get_components
from shared_types import TrendPeriod

INSIGHT_STYLE = {
    "positive": "green",
    "concern": "red",
    "improvement": "cyan",
    "achievement": "yellow",
}


@click.command()
@click.option(
    "-p",
    "--period",
    default=TrendPeriod.WEEKLY.value,
    type=click.Choice([p.value for p in TrendPeriod]),
)
def trends(period: str):
    """Average mood per day, ISO week, or month."""
    c = get_components()
    result = MoodTrends(c["moods"]).get_trends(c["user_id"], period)
    if not result["trends"]:
        console.print("[yellow]No mood entries in this window.[/]")
        return

    table = Table(title=f"Mood trends ({period})", show_header=True)
    table.add_column("Period", style="dim")
    table.add_column("Average", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Distribution")
    for bucket in result["trends"]:
        dist = ", ".join(f"{k}={v}" for k, v in sorted(bucket["mood_distribution"].items()))
        table.add_row(
            bucket["period"],
            f"{bucket['average_score']:.2f}",
            str(bucket["entry_count"]),
            dist,
        )
    console.print(table)


@click.command()
def streaks():
    """Current and longest logging streaks."""
    c = get_components()
    s = get_streaks(c["moods"], c["user_id"])

    table = Table(show_header=True, title="Streaks")
    table.add_column("")
    table.add_column("Current", justify="right")
    table.add_column("Longest", justify="right")
    table.add_row("Days logged", str(s["current_streak"]), str(s["longest_streak"]))
    table.add_row(
        "Positive days", str(s["current_positive_streak"]), str(s["longest_positive_streak"])
    )
    console.print(table)
    console.print(f"[dim]Total entries: {s['total_entries']}[/]")


@click.command()
@click.option("-p", "--period", default="30d", type=click.Choice(list(INSIGHT_PERIODS)))
def insights(period: str):
    """Observations about recent moods and journaling."""
    c = get_components()
    result = InsightGenerator(c["moods"], c["journals"]).generate(c["user_id"], period)

    if not result["insights"]:
        console.print(f"[yellow]No insights for the last {result['period']}.[/]")
    for item in result["insights"]:
        style = INSIGHT_STYLE.get(item["type"], "white")
        console.print(f"[{style}]{item['title']}[/] {item['message']}")

    stats = result["stats"]
    console.print(
        f"\n[bold]Moods:[/] {stats['mood_entries']} (avg {stats['average_mood']:.2f})  |  "
        f"[bold]Scored journals:[/] {stats['journal_entries']} "
        f"(avg {stats['average_sentiment']:+.2f})"
    )
