"""
Link extraction for hostcrawl.

Hrefs are returned raw; resolving and filtering them is the registry's job.
"""
from __future__ import annotations

from typing import List, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag

from hostcrawl.errors import ParseError

__all__ = ("Parser", "HtmlLinkParser", "extract_links")


class Parser(Protocol):
    """Protocol for link parsers."""

    def parse(self, body: bytes) -> List[str]:
        ...


class HtmlLinkParser:
    """Collects the ``href`` of every ``<a>`` element in document order."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(self, body: bytes) -> List[str]:
        try:
            soup = BeautifulSoup(body, self.features)
            links: List[str] = []
            for tag in soup.find_all("a", href=True):
                if not isinstance(tag, Tag):
                    continue
                href = tag.get("href")
                if isinstance(href, list):
                    href = " ".join(href)
                if isinstance(href, str):
                    links.append(href)
        except Exception as exc:
            raise ParseError(f"cannot parse page: {exc}") from exc
        return links


def extract_links(body: bytes) -> List[str]:
    """Extract raw hrefs from *body* with the default HTML parser."""
    return HtmlLinkParser().parse(body)
