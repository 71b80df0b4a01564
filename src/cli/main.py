"""CLI entry point for moodlog."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import insights, journal, mood, reminders, sentiment, streaks, trends
from cli.config import load_config_model
from cli.logging_config import setup_logging
from cli.utils import console


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Moodlog - daily mood and journal tracker."""
    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level, log_file=config.paths.log_file)
    ctx.obj = config


@cli.command()
@click.option("--host", help="Bind address (default from config)")
@click.option("--port", type=int, help="Port (default from config)")
@click.pass_obj
def serve(config, host: str, port: int):
    """Run the HTTP API."""
    import uvicorn

    setup_logging(json_mode=True, level=config.logging.level, log_file=config.paths.log_file)
    uvicorn.run(
        "web.app:app",
        host=host or config.web.host,
        port=port or config.web.port,
        log_config=None,
    )


cli.add_command(mood)
cli.add_command(journal)
cli.add_command(trends)
cli.add_command(streaks)
cli.add_command(insights)
cli.add_command(sentiment)
cli.add_command(reminders)


if __name__ == "__main__":
    cli()
