"""
JSON report for hostcrawl.

Serializes the crawl results (and optionally the crawl counters) to a file.
"""
import json
from pathlib import Path
from typing import Iterable, Optional

from hostcrawl.crawler.models import CrawlResult, CrawlStats


def build_report(results: Iterable[CrawlResult], stats: Optional[CrawlStats] = None) -> dict:
    """Split results into pages and failures, sorted by URL for stable output."""
    ordered = sorted(results, key=lambda r: r.url)
    data = {
        "pages": [r.to_dict() for r in ordered if r.ok],
        "failures": [r.to_dict() for r in ordered if not r.ok],
    }
    if stats is not None:
        data["stats"] = stats.to_dict()
    return data


def render_json(
    results: Iterable[CrawlResult],
    output_path: Path | str,
    stats: Optional[CrawlStats] = None,
    pretty: bool = True,
) -> Path:
    """
    Save the crawl report as JSON at the given path.

    :param results: results collected by the sink
    :param output_path: path of the JSON file
    :param stats: crawl counters to embed, if any
    :param pretty: indent the output
    :return: Path of the saved file

    Example:
    ```python
    from hostcrawl.report.json_report import render_json
    report_path = render_json(collector.results, 'reports/crawl.json', stats)
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(build_report(results, stats), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
