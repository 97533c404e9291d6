"""hostcrawl.report: result sinks and file reports (JSON and HTML) used by the CLI and tests."""

from __future__ import annotations

from hostcrawl.report.console import ConsoleReporter, format_result
from hostcrawl.report.html_report import render_html
from hostcrawl.report.json_report import build_report, render_json

__all__ = ["ConsoleReporter", "format_result", "build_report", "render_json", "render_html"]
