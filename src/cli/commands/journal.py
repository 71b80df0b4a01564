"""Journal CLI commands."""

import sys
from datetime import date

import click

from cli.utils import console, get_components
from journal.sentiment import analyze_journal_sentiment
from journal.storage import MAX_CONTENT_LENGTH

LABEL_STYLE = {"positive": "green", "negative": "red", "neutral": "dim"}


@click.group()
def journal():
    """Write today's journal entry and score its sentiment."""
    pass


@journal.command("add")
@click.option("--title", help="Entry title")
@click.option("--tags", help="Comma-separated tags")
@click.option("--public", is_flag=True, help="Mark the entry as not private")
@click.argument("content", required=False)
def journal_add(title: str, tags: str, public: bool, content: str):
    """Write today's entry. Opens editor if no content provided."""
    if not content:
        content = click.edit("\n")
    content = (content or "").strip()
    if not content:
        console.print("[yellow]No content provided, cancelled.[/]")
        return
    if len(content) > MAX_CONTENT_LENGTH:
        raise click.BadParameter(f"Content cannot exceed {MAX_CONTENT_LENGTH} characters")

    c = get_components()
    todays_mood = c["moods"].get_for_day(c["user_id"], date.today())
    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else None
    entry, created = c["journals"].upsert_for_day(
        c["user_id"],
        content,
        title=title,
        tags=tag_list,
        is_private=not public,
        mood_id=todays_mood.id if todays_mood else None,
    )
    console.print(f"[green]{'Created' if created else 'Updated'}:[/] journal {entry.id}")


@journal.command("sentiment")
@click.argument("entry_id", required=False)
def journal_sentiment(entry_id: str):
    """Score an entry's sentiment (today's entry by default). Cached after first run."""
    c = get_components()
    store = c["journals"]
    entry = store.get(c["user_id"], entry_id) if entry_id else store.get_for_day(
        c["user_id"], date.today()
    )
    if not entry:
        console.print("[red]Journal entry not found[/]")
        sys.exit(1)
    if not entry.has_sentiment:
        entry = store.save_sentiment(c["user_id"], entry.id, analyze_journal_sentiment(entry.content))

    s = entry.sentiment
    style = LABEL_STYLE.get(s["label"], "dim")
    console.print(
        f"[{style}]{s['label']}[/]  score {s['score']:+.2f}  confidence {s['confidence']:.2f}"
    )
