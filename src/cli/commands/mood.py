"""Mood tracking CLI commands."""

from datetime import date

import click
from rich.table import Table

from analytics.trends import AVERAGE_PERIODS, MoodTrends
from cli.utils import console, get_components, mood_label
from mood.models import MAX_NOTES_LENGTH, MAX_TAG_LENGTH
from shared_types import MoodType


@click.group()
def mood():
    """Log and review daily moods."""
    pass


@mood.command("add")
@click.argument("mood_type", type=click.Choice([m.value for m in MoodType]))
@click.option("-n", "--notes", help="Notes (max 500 chars)")
@click.option("--tags", help="Comma-separated tags")
def mood_add(mood_type: str, notes: str, tags: str):
    """Log today's mood (replaces today's entry if there is one)."""
    if notes and len(notes) > MAX_NOTES_LENGTH:
        raise click.BadParameter("Notes cannot exceed 500 characters", param_hint="--notes")
    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else []
    if any(len(t) > MAX_TAG_LENGTH for t in tag_list):
        raise click.BadParameter("Each tag cannot exceed 20 characters", param_hint="--tags")

    c = get_components()
    entry, created = c["moods"].upsert_for_day(c["user_id"], mood_type, notes=notes, tags=tag_list)
    verb = "Logged" if created else "Updated"
    console.print(f"[green]{verb}:[/] {mood_label(entry.mood_type)} (score {entry.mood_score})")


@mood.command("today")
def mood_today():
    """Show today's mood."""
    c = get_components()
    entry = c["moods"].get_for_day(c["user_id"], date.today())
    if not entry:
        console.print("[yellow]No mood logged today.[/]")
        return
    console.print(f"{mood_label(entry.mood_type)}  score {entry.mood_score}")
    if entry.notes:
        console.print(f"[dim]{entry.notes}[/]")


@mood.command("history")
@click.option("-n", "--limit", default=30, help="Max entries to show")
def mood_history(limit: int):
    """List recent mood entries, newest first."""
    c = get_components()
    entries = c["moods"].list_entries(c["user_id"], limit=limit)
    if not entries:
        console.print("[yellow]No entries found.[/]")
        return

    table = Table(show_header=True, title="Mood history")
    table.add_column("Date", style="dim")
    table.add_column("Mood")
    table.add_column("Score", justify="right")
    table.add_column("Notes")
    for e in entries:
        table.add_row(e.day, mood_label(e.mood_type), str(e.mood_score), (e.notes or "")[:40])
    console.print(table)


@mood.command("average")
@click.option(
    "-p", "--period", default="7d", type=click.Choice(list(AVERAGE_PERIODS)), help="Window"
)
def mood_average(period: str):
    """Average mood score over a period."""
    c = get_components()
    summary = MoodTrends(c["moods"]).get_average(c["user_id"], period=period)
    console.print(
        f"[bold]Average:[/] {summary['average_score']:.2f}  |  "
        f"Entries: {summary['total_entries']}"
    )
    for mood_type, count in sorted(summary["mood_distribution"].items()):
        console.print(f"  {mood_label(mood_type)}  {count}")
