"""
Data models for the hostcrawl crawler.
"""
from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class CrawlState(enum.Enum):
    """Global state of a crawl run."""

    RUNNING = "running"
    DRAINING = "draining"
    CLOSED = "closed"


@dataclass(slots=True)
class CrawlResult:
    """Outcome of processing one claimed URL.

    ``links`` holds the raw hrefs exactly as found on the page, in document
    order. A failed result carries the cause in ``error`` and no links.
    """

    url: str
    links: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "links": list(self.links)}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(slots=True)
class CrawlStats:
    """Counters collected while crawling."""

    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None
    pages: int = 0
    failures: int = 0
    duplicates: int = 0
    out_of_scope: int = 0
    malformed: int = 0
    enqueued: int = 0
    cancelled: bool = False

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    @property
    def processed(self) -> int:
        return self.pages + self.failures

    @property
    def pages_per_second(self) -> float:
        elapsed = self.elapsed
        return self.processed / elapsed if elapsed > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages": self.pages,
            "failures": self.failures,
            "duplicates": self.duplicates,
            "out_of_scope": self.out_of_scope,
            "malformed": self.malformed,
            "enqueued": self.enqueued,
            "cancelled": self.cancelled,
            "elapsed": round(self.elapsed, 3),
        }
