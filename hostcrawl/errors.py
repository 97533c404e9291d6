"""Exception taxonomy for hostcrawl.

Only :class:`ConfigError` is fatal: it is raised before any worker starts.
Everything else is contained within the worker that processes the URL and
surfaces as a failed :class:`~hostcrawl.crawler.models.CrawlResult`.
"""
from __future__ import annotations

from typing import Optional

__all__ = ("CrawlError", "ConfigError", "MalformedURLError", "FetchError", "ParseError")


class CrawlError(Exception):
    """Base class for every error raised by hostcrawl."""


class ConfigError(CrawlError, ValueError):
    """Invalid crawl configuration (unparsable seed, empty hostname, ...)."""


class MalformedURLError(CrawlError, ValueError):
    """A raw link could not be parsed into a URL."""

    def __init__(self, raw: str, reason: str = "") -> None:
        self.raw = raw
        self.reason = reason
        msg = f"malformed URL {raw!r}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class FetchError(CrawlError):
    """Network or HTTP failure while downloading a page."""

    def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
        self.url = url
        self.status = status
        super().__init__(message)


class ParseError(CrawlError):
    """Page content could not be parsed for links."""
