import json

from hostcrawl.crawler.models import CrawlResult, CrawlStats
from hostcrawl.report import build_report, format_result, render_html, render_json
from hostcrawl.report.console import ConsoleReporter


def test_format_result_with_links(mock_result):
    assert format_result(mock_result) == (
        "Visited: https://x.com\n"
        "Found 2 link(s):\n"
        "  - about.html\n"
        "  - /products.html\n"
    )


def test_format_result_without_links():
    assert format_result(CrawlResult("https://x.com/a")) == "Visited: https://x.com/a\nNo links found\n"


def test_format_failed_result(failed_result):
    text = format_result(failed_result)
    assert text.startswith("Visited: https://x.com/broken\nFailed: HTTP 500")


def test_console_reporter_echoes_and_collects(capsys, mock_result):
    reporter = ConsoleReporter()
    reporter.handle(mock_result)
    out = capsys.readouterr().out
    assert "Visited: https://x.com" in out
    assert reporter.results == [mock_result]


def test_quiet_console_reporter(capsys, mock_result):
    reporter = ConsoleReporter(quiet=True)
    reporter.handle(mock_result)
    assert capsys.readouterr().out == ""
    assert reporter.results == [mock_result]


def test_build_report_splits_and_sorts(mock_result, failed_result):
    other = CrawlResult("https://x.com/about.html")
    report = build_report([other, failed_result, mock_result])
    assert [p["url"] for p in report["pages"]] == ["https://x.com", "https://x.com/about.html"]
    assert report["failures"] == [failed_result.to_dict()]
    assert "stats" not in report


def test_render_json(tmp_path, mock_result, failed_result):
    stats = CrawlStats(pages=1, failures=1)
    out = render_json([mock_result, failed_result], tmp_path / "nested" / "report.json", stats=stats)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages"][0] == {"url": "https://x.com", "links": ["about.html", "/products.html"]}
    assert data["failures"][0]["error"].startswith("HTTP 500")
    assert data["stats"]["pages"] == 1


def test_render_html_default_template(tmp_path, mock_result, failed_result):
    out = render_html([mock_result, failed_result], tmp_path / "report.html", stats=CrawlStats(pages=1))
    html = out.read_text(encoding="utf-8")
    assert "https://x.com" in html
    assert "/products.html" in html
    assert "Failures (1)" in html


def test_render_html_custom_template(tmp_path, mock_result):
    tpl = tmp_path / "tpl"
    tpl.mkdir()
    (tpl / "report.html.j2").write_text("{% for p in pages %}{{ p.url }};{% endfor %}", encoding="utf-8")
    out = render_html([mock_result], tmp_path / "r.html", template_dir=tpl)
    assert out.read_text(encoding="utf-8") == "https://x.com;"


def test_html_is_escaped(tmp_path):
    result = CrawlResult("https://x.com", links=["<script>alert(1)</script>"])
    html = render_html([result], tmp_path / "r.html").read_text(encoding="utf-8")
    assert "<script>alert(1)</script>" not in html
