# web_search.py — 2026-10-19
"""
Turn a search box query or a picked category/tag into one concrete request.

Bare terms ("romance") are ambiguous across site layouts, so candidate paths
are probed live, one at a time, in priority order.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.parse import urlencode

from config import SiteConfig
from fetcher import Fetcher
from models import Request
from utils import best_effort, page_path_segment

logger = logging.getLogger(__name__)


class SearchTargetNotFound(LookupError):
    """Strict mode only: no candidate path answered successfully."""

    def __init__(self, keys: List[str], tried: List[str]):
        super().__init__(f"no URL found for {keys!r} (tried {len(tried)} candidates)")
        self.keys = keys
        self.tried = tried


# ─────────────────────── helpers ─────────────────────────────── #
def clean_key(raw: str) -> str:
    return (raw or "").strip().strip("/").strip()


def candidate_paths(key: str, buckets: Iterable[str]) -> List[str]:
    """`romance` → `["romance", "genre/romance", "category/romance", "tag/romance"]`."""
    if "/" in key:
        return [key]
    return [f"{b}/{key}" if b else key for b in buckets]


class SearchResolver:
    def __init__(self, config: SiteConfig, fetcher: Fetcher,
                 headers: Optional[dict] = None) -> None:
        self.config = config
        self.fetcher = fetcher
        self.headers = dict(headers or {})

    @property
    def base(self) -> str:
        return self.config.base_url.rstrip("/")

    def _request(self, url: str, method: str = "GET") -> Request:
        return Request(url, method=method, headers=dict(self.headers))

    def path_url(self, path: str, page: int) -> str:
        url = f"{self.base}/{path.strip('/')}/" if path.strip("/") else f"{self.base}/"
        return url + page_path_segment(page)

    def query_url(self, query: str, page: int) -> str:
        prefix = f"{self.base}/page/{page}" if page > 1 else f"{self.base}/"
        return f"{prefix}?{urlencode({self.config.search_param: query})}"

    def _probe(self, url: str) -> bool:
        attempt = best_effort(self.fetcher.probe,
                              self._request(url, self.config.probe_method),
                              label=f"probe {url}")
        ok = attempt.ok and attempt.value
        logger.info("probe %s → %s", url, "hit" if ok else "miss")
        return bool(ok)

    # ─────────────────────── public API ──────────────────────────── #
    def resolve(self, page: int, query: str = "",
                keys: Iterable[str] = (), strict: bool = False) -> Request:
        """
        Query beats filters; concrete keys are used as-is; bare keys are
        probed; if nothing answers, fall back to `<default_bucket>/<first key>`
        (or raise `SearchTargetNotFound` when `strict`).
        """
        if query:
            return self._request(self.query_url(query, page))

        keys = [k for k in (clean_key(k) for k in keys) if k]
        if not keys:
            return self._request(self.path_url("", page))

        tried: List[str] = []
        for key in keys:
            if "/" in key:
                return self._request(self.path_url(key, page))
            for candidate in candidate_paths(key, self.config.probe_buckets):
                if candidate in tried:
                    continue
                tried.append(candidate)
                url = self.path_url(candidate, page)
                if self._probe(url):
                    return self._request(url)

        if strict:
            raise SearchTargetNotFound(keys, tried)

        first = keys[0]
        fallback = first if "/" in first else f"{self.config.default_bucket}/{first}"
        logger.warning("no candidate answered for %s; guessing %s", keys, fallback)
        return self._request(self.path_url(fallback, page))
