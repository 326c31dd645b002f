# interceptor.py
"""
Response hook that harvests categories from whatever pages the adapter
loads anyway, so the explicit categories request is usually never needed.
"""

from __future__ import annotations

import logging
from typing import Callable, List

import requests

from fetcher import Proceed, rebuild_response
from memory import CategoryCache
from models import CategoryEntry, Request
from parser import Document
from utils import best_effort

logger = logging.getLogger(__name__)

CategoryParser = Callable[[Document], List[CategoryEntry]]


def is_textual(resp: requests.Response) -> bool:
    """`text/*` or any `*/…html…` content type."""
    ct = (resp.headers.get("content-type") or "").split(";")[0].strip().lower()
    if "/" not in ct:
        return False
    kind, subtype = ct.split("/", 1)
    return kind == "text" or "html" in subtype


class CategoryInterceptor:
    """Offers categories parsed from textual responses until the cache is full."""

    def __init__(self, cache: CategoryCache, parse: CategoryParser) -> None:
        self.cache = cache
        self.parse = parse

    def __call__(self, request: Request, proceed: Proceed) -> requests.Response:
        resp = proceed(request)
        if self.cache.populated or not is_textual(resp):
            return resp

        body = resp.content
        attempt = best_effort(self._harvest, body, resp.url or request.url,
                              label=f"category harvest {request.url}")
        if attempt.ok and attempt.value:
            logger.debug("harvested categories from %s", request.url)
        return rebuild_response(resp, body)

    def _harvest(self, body: bytes, url: str) -> bool:
        doc = Document(body.decode("utf-8", errors="replace"), url)
        return self.cache.offer(self.parse(doc))
