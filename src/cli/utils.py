"""Shared CLI utilities."""

import sys

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()

MOOD_COLORS = {
    "very_sad": "red",
    "sad": "magenta",
    "neutral": "dim",
    "happy": "green",
    "very_happy": "bold green",
}


def get_components() -> dict:
    """Initialize storages from config for the configured local user."""
    from cli.config import load_config_model
    from journal import JournalStorage
    from mood import MoodStorage
    from web.user_store import get_or_create_user, init_db

    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    db_path = config.paths.db_path
    init_db(db_path)
    user_id = config.cli.user_id
    get_or_create_user(user_id, db_path=db_path)

    return {
        "config": config,
        "db_path": db_path,
        "user_id": user_id,
        "moods": MoodStorage(db_path),
        "journals": JournalStorage(db_path),
    }


def mood_label(mood_type: str) -> str:
    color = MOOD_COLORS.get(mood_type, "dim")
    return f"[{color}]██ {mood_type}[/]"
