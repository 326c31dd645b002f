# conftest.py
# Put the repository root on sys.path so the flat modules import without an
# install, and provide an offline stand-in for requests.Session.

import io
import sys
from pathlib import Path

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

BASE = "https://example.com"

HOME_HTML = """
<html><body>
  <ul class="megamenu">
    <li><a href="https://example.com/category/romance/">Romance</a></li>
    <li><a href="/category/drama/">Drama</a></li>
    <li><a href="https://example.com/tag/action/">Action</a></li>
  </ul>
  <article class="blog-entry">
    <h2 class="blog-entry-title"><a href="https://example.com/first-post/">First Post</a></h2>
    <div class="thumbnail"><img data-src="https://example.com/wp-content/uploads/first.jpg"></div>
  </article>
  <article class="blog-entry">
    <h2 class="blog-entry-title"><a href="/second-post/">Second Post</a></h2>
    <div class="thumbnail"><img src="/wp-content/uploads/second.jpg"></div>
  </article>
  <ul class="page-numbers"><li><a class="next" href="/page/2/">Next</a></li></ul>
</body></html>
"""

PLAIN_HTML = "<html><body><p>nothing to see</p></body></html>"


def make_response(status=200, body="", content_type="text/html; charset=UTF-8", url=BASE + "/"):
    resp = requests.Response()
    resp.status_code = status
    data = body.encode("utf-8") if isinstance(body, str) else body
    resp._content = data
    resp._content_consumed = True
    resp.raw = io.BytesIO(data)
    resp.encoding = "utf-8"
    resp.url = url
    if content_type:
        resp.headers["Content-Type"] = content_type
    return resp


class FakeSession:
    """
    Minimal requests.Session: `routes` maps URL → (status, body[, content type])
    or an exception instance to raise. Unknown URLs answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, allow_redirects=True):
        self.calls.append((method, url))
        route = self.routes.get(url, (404, "not found"))
        if isinstance(route, Exception):
            raise route
        status, body, *rest = route
        ctype = rest[0] if rest else "text/html; charset=UTF-8"
        return make_response(status, body, ctype, url)

    @property
    def urls(self):
        return [u for _, u in self.calls]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def site_config():
    from config import SiteConfig
    return SiteConfig(base_url=BASE, retries=0)
