#fetcher.py
from __future__ import annotations

import io
import logging
import random
import time
from typing import Callable, List, Optional

import requests

from models import Request
from parser import Document

logger = logging.getLogger(__name__)

_UA_POOL = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_5) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
    "Mozilla/5.0 (Macintosh; arm64; Mac OS X 14_0) AppleWebKit/605.1.15 (KHTML, like Gecko)",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
]

Proceed     = Callable[[Request], requests.Response]
Interceptor = Callable[[Request, Proceed], requests.Response]


def _ua() -> str:
    return random.choice(_UA_POOL)


def default_headers(base_url: str) -> dict:
    return {"User-Agent": _ua(), "Referer": f"{base_url.rstrip('/')}/"}


def rebuild_response(response: requests.Response, body: bytes) -> requests.Response:
    """
    Copy of `response` whose body is `body`.

    Needed once a hook has read the original body: `.content`, `.text` and
    `iter_content()` on the copy all see the same bytes again.
    """
    fresh = requests.Response()
    fresh.status_code = response.status_code
    fresh.headers = response.headers.copy()
    fresh.url = response.url
    fresh.reason = response.reason
    fresh.encoding = response.encoding
    fresh.history = list(response.history)
    fresh.cookies = response.cookies
    fresh.elapsed = response.elapsed
    fresh.request = response.request
    fresh.raw = io.BytesIO(body)
    fresh._content = body
    fresh._content_consumed = True
    return fresh


class Fetcher:
    """
    Thin HTTP execution layer over a `requests.Session`.

    Interceptors wrap every call in registration order, outermost first, and
    get `(request, proceed)`; calling `proceed(request)` runs the rest of the
    chain and finally the network.
    """

    def __init__(self,
                 headers: Optional[dict] = None,
                 timeout: int = 10,
                 retries: int = 2,
                 session: Optional[requests.Session] = None) -> None:
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.retries = retries
        self.session = session or requests.Session()
        self._interceptors: List[Interceptor] = []

    def add_interceptor(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)

    # ---------- execution ----------
    def execute(self, request: Request) -> requests.Response:
        """Run `request` through the interceptor chain. Transport errors propagate."""
        return self._proceed(0, request)

    def _proceed(self, index: int, request: Request) -> requests.Response:
        if index == len(self._interceptors):
            return self._send(request)
        return self._interceptors[index](request, lambda r: self._proceed(index + 1, r))

    def _send(self, request: Request) -> requests.Response:
        logger.debug("%s %s", request.method, request.url)
        return self.session.request(
            request.method,
            request.url,
            headers={**self.headers, **request.headers},
            timeout=self.timeout,
            allow_redirects=True,
        )

    # ---------- convenience ----------
    def fetch(self, request: Request, retries: Optional[int] = None) -> requests.Response:
        """
        Execute and require a 2xx status, retrying transport errors with
        linear backoff. The last error is re-raised.
        """
        retries = self.retries if retries is None else retries
        attempt = 1
        while True:
            try:
                logger.info("FETCH %s  (try %d)", request.url, attempt)
                resp = self.execute(request)
                resp.raise_for_status()
                return resp
            except requests.RequestException as exc:
                logger.warning("  ↳ error: %s", exc)
                if attempt > retries:
                    raise
                time.sleep(1.5 * attempt)
                attempt += 1

    def fetch_document(self, request: Request, retries: Optional[int] = None) -> Document:
        resp = self.fetch(request, retries=retries)
        return Document.from_response(resp)

    def probe(self, request: Request) -> bool:
        """True when `request` answers with a 2xx status. Transport errors propagate."""
        resp = self.execute(request)
        try:
            return 200 <= resp.status_code < 300
        finally:
            resp.close()
