"""Console result sink: prints each page as soon as it is processed."""
from __future__ import annotations

import click

from hostcrawl.crawler.models import CrawlResult
from hostcrawl.crawler.stream import ResultCollector

__all__ = ["ConsoleReporter", "format_result"]


def format_result(result: CrawlResult) -> str:
    """Render one result as the text block printed by the console reporter."""
    lines = [f"Visited: {result.url}"]
    if not result.ok:
        lines.append(f"Failed: {result.error}")
    elif result.links:
        lines.append(f"Found {len(result.links)} link(s):")
        lines.extend(f"  - {link}" for link in result.links)
    else:
        lines.append("No links found")
    return "\n".join(lines) + "\n"


class ConsoleReporter(ResultCollector):
    """Echoes every result to stdout and keeps it for the file reports."""

    def __init__(self, *, quiet: bool = False) -> None:
        super().__init__()
        self.quiet = quiet

    def handle(self, result: CrawlResult) -> None:
        super().handle(result)
        if not self.quiet:
            click.echo(format_result(result))
