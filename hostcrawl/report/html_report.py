"""hostcrawl.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from hostcrawl.crawler.models import CrawlResult, CrawlStats
from hostcrawl.report.json_report import build_report

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    results: Iterable[CrawlResult],
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
    stats: Optional[CrawlStats] = None,
) -> Path:
    """Render the HTML report from the template and save it at *output_path*.

    Args:
        results: results collected by the sink.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``report.html.j2``; the packaged
            template is used when omitted.
        stats: crawl counters to show in the summary.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = build_report(results, stats)
    context.setdefault("stats", None)

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
