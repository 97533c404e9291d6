"""
URL registry: canonicalization, same-host scope and the visited set.

The visited set is owned by :class:`UrlRegistry`; nothing else reads or
mutates it. Claiming is a single insert-if-absent under the lock of the
partition the URL hashes to.
"""
from __future__ import annotations

import re
import threading
from typing import List, Optional, Set
from urllib.parse import SplitResult, quote, unquote, urljoin, urlsplit, urlunsplit

from hostcrawl.errors import ConfigError, MalformedURLError

__all__ = ("UrlRegistry",)

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
# reserved characters keep their meaning inside the path
_PATH_SAFE = "/:@!$&'()*+,;=~"


class _Shard:
    __slots__ = ("lock", "urls")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.urls: Set[str] = set()


class UrlRegistry:
    """Canonicalizes URLs and guarantees each one is claimed at most once."""

    def __init__(self, seed_url: str, shards: int = 16) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")
        seed = seed_url.strip()
        if seed and "://" not in seed:
            seed = f"https://{seed}"
        self._seed_raw = seed
        try:
            parts = self._split(seed)
        except MalformedURLError as exc:
            raise ConfigError(f"invalid seed URL {seed_url!r}: {exc.reason}") from exc
        if not parts.hostname:
            raise ConfigError(f"invalid seed URL {seed_url!r}: empty hostname")
        self._seed_host: str = parts.hostname
        self._seed: str = self._join(parts)
        self._shards: List[_Shard] = [_Shard() for _ in range(shards)]

    # ------------------------------------------------------------------ #
    # Properties                                                          #
    # ------------------------------------------------------------------ #

    @property
    def seed_url(self) -> str:
        """Canonical form of the seed URL."""
        return self._seed

    @property
    def seed_host(self) -> str:
        return self._seed_host

    @property
    def claimed_count(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.urls)
        return total

    def __len__(self) -> int:
        return self.claimed_count

    # ------------------------------------------------------------------ #
    # Canonicalization & scope                                            #
    # ------------------------------------------------------------------ #

    def canonicalize(self, raw: str, base: Optional[str] = None) -> str:
        """
        Return the canonical absolute form of *raw*.

        A reference without a scheme is resolved against *base* (the URL of
        the page it was found on) or, when *base* is empty, against the seed.
        The fragment is dropped and a single trailing ``/`` is trimmed from
        the path. Raises MalformedURLError when *raw* cannot be parsed.
        """
        if not isinstance(raw, str):
            raise MalformedURLError(repr(raw), "not a string")
        text = raw.strip()
        parts = self._split(text)
        if not parts.scheme:
            parts = self._split(urljoin(base or self._seed_raw, text))
        return self._join(parts)

    def is_in_scope(self, url: str) -> bool:
        """True iff the hostname of *url* equals the seed hostname exactly."""
        try:
            hostname = urlsplit(url).hostname
        except ValueError:
            return False
        return hostname is not None and hostname == self._seed_host

    # ------------------------------------------------------------------ #
    # Visited set                                                         #
    # ------------------------------------------------------------------ #

    def try_claim(self, url: str) -> bool:
        """Atomically record *url* as claimed; False if it already was."""
        shard = self._shard(url)
        with shard.lock:
            if url in shard.urls:
                return False
            shard.urls.add(url)
        return True

    def is_claimed(self, url: str) -> bool:
        """Membership hint. A False answer may be stale by the time it is used."""
        shard = self._shard(url)
        with shard.lock:
            return url in shard.urls

    # ------------------------------------------------------------------ #
    # Internals                                                           #
    # ------------------------------------------------------------------ #

    def _shard(self, url: str) -> _Shard:
        return self._shards[hash(url) % len(self._shards)]

    @staticmethod
    def _split(text: str) -> SplitResult:
        if _CONTROL_RE.search(text):
            raise MalformedURLError(text, "control character in URL")
        try:
            parts = urlsplit(text)
            parts.port  # raises on a non-numeric or out-of-range port
        except ValueError as exc:
            raise MalformedURLError(text, str(exc)) from exc
        return parts

    @staticmethod
    def _join(parts: SplitResult) -> str:
        path = parts.path[:-1] if parts.path.endswith("/") else parts.path
        # "my page" and "my%20page" name the same resource
        path = quote(unquote(path), safe=_PATH_SAFE)
        userinfo, at, hostport = parts.netloc.rpartition("@")
        netloc = f"{userinfo}{at}{hostport.lower()}"
        return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, ""))
