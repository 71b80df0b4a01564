"""Ad-hoc sentiment CLI command."""

import asyncio

import click

from cli.utils import console
from external import SentimentAPIClient, analyze_sentiment


async def _analyze(text: str, config) -> dict:
    ext = config.external
    async with SentimentAPIClient(
        ext.sentiment_api_key, url=ext.sentiment_api_url, timeout=ext.timeout
    ) as service:
        return await analyze_sentiment(text, service)


@click.command()
@click.argument("text")
def sentiment(text: str):
    """Score TEXT with the sentiment API, or locally when it is unavailable."""
    from cli.config import load_config_model

    if not text.strip():
        raise click.BadParameter("Text is required for sentiment analysis")
    result = asyncio.run(_analyze(text, load_config_model()))

    console.print(f"[dim]source: {result['source']}[/]")
    for key, value in result["sentiment"].items():
        console.print(f"[bold]{key}:[/] {value}")
