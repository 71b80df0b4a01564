"""Reminder dispatch CLI command (run from cron once a minute)."""

import click

from cli.utils import console, get_components
from reminders import send_due_reminders


@click.group()
def reminders():
    """Daily mood reminders."""
    pass


@reminders.command("send")
def reminders_send():
    """Notify users whose reminder time is now and who haven't logged a mood today."""
    c = get_components()
    sent = send_due_reminders(c["db_path"], mood_storage=c["moods"])
    console.print(f"Sent {len(sent)} reminder(s)")
