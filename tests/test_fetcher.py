"""Tests for the interceptor chain and fetch helpers."""

import pytest
import requests

from conftest import BASE, FakeSession, make_response
from fetcher import Fetcher, default_headers, rebuild_response
from models import Request


def test_interceptors_run_outermost_first():
    order = []

    def outer(request, proceed):
        order.append("outer-in")
        resp = proceed(request)
        order.append("outer-out")
        return resp

    def inner(request, proceed):
        order.append("inner-in")
        resp = proceed(request)
        order.append("inner-out")
        return resp

    fetcher = Fetcher(session=FakeSession({BASE + "/": (200, "ok")}))
    fetcher.add_interceptor(outer)
    fetcher.add_interceptor(inner)
    fetcher.execute(Request(BASE + "/"))

    assert order == ["outer-in", "inner-in", "inner-out", "outer-out"]


def test_fetch_retries_transport_errors_then_raises(monkeypatch):
    monkeypatch.setattr("fetcher.time.sleep", lambda s: None)
    session = FakeSession({BASE + "/": requests.ConnectionError("boom")})
    fetcher = Fetcher(session=session, retries=2)

    with pytest.raises(requests.ConnectionError):
        fetcher.fetch(Request(BASE + "/"))
    assert len(session.calls) == 3


def test_fetch_rejects_error_status():
    fetcher = Fetcher(session=FakeSession(), retries=0)
    with pytest.raises(requests.HTTPError):
        fetcher.fetch(Request(BASE + "/missing/"))


def test_probe_reports_success_only_for_2xx():
    session = FakeSession({BASE + "/a/": (200, "x"), BASE + "/b/": (500, "x")})
    fetcher = Fetcher(session=session)
    assert fetcher.probe(Request(BASE + "/a/"))
    assert not fetcher.probe(Request(BASE + "/b/"))
    assert not fetcher.probe(Request(BASE + "/c/"))


def test_rebuild_response_keeps_metadata():
    original = make_response(201, "<p>hi</p>", "text/html", BASE + "/p/")
    copy = rebuild_response(original, b"<p>hi</p>")
    assert copy.status_code == 201
    assert copy.url == BASE + "/p/"
    assert copy.headers["Content-Type"] == "text/html"
    assert copy.text == "<p>hi</p>"


def test_default_headers_set_referer():
    headers = default_headers(BASE + "/")
    assert headers["Referer"] == BASE + "/"
    assert headers["User-Agent"]
