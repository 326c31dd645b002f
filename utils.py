# utils.py — 2026-10-19
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, NamedTuple, Optional
from urllib.parse import urlparse

from models import Entry

logger = logging.getLogger(__name__)


# ─────────────────────── best-effort policy ───────────────────────
class Attempt(NamedTuple):
    """Outcome of a best-effort call: `ok` plus either `value` or `error`."""
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None


def best_effort(fn: Callable[..., Any], *args: Any,
                label: str = "", **kwargs: Any) -> Attempt:
    """
    Run `fn` and never raise.

    Used for discovery, interception and probing, where a failure only means
    "no data this time". Callers decide what to do with a failed Attempt.
    """
    try:
        return Attempt(True, fn(*args, **kwargs))
    except Exception as exc:
        logger.debug("best-effort %s failed: %s", label or getattr(fn, "__name__", fn), exc)
        return Attempt(False, error=exc)


# ─────────────────────────── URL helpers ──────────────────────────
def page_path_segment(page: int) -> str:
    return f"page/{page}/" if page > 1 else ""


def url_without_domain(url: str) -> str:
    """`https://x.com/a/b?c=1#d` → `/a/b?c=1#d`."""
    parts = urlparse(url)
    out = parts.path or "/"
    if parts.query:
        out += "?" + parts.query
    if parts.fragment:
        out += "#" + parts.fragment
    return out


# ─────────────────────────── dates ────────────────────────────────
def parse_date_millis(value: str, fmt: str) -> int:
    """Epoch milliseconds for `value`, 0 when it is missing or malformed."""
    if not value:
        return 0
    try:
        return int(datetime.strptime(value.strip(), fmt).timestamp() * 1000)
    except ValueError:
        return 0


# ─────────────────── pretty-print for the console ─────────────────
def format_entries(entries: Iterable[Entry], has_next: bool = False) -> str:
    """Human-friendly console view of a listing page."""
    entries = list(entries)
    if not entries:
        return "No entries found."
    body = "\n".join(
        f"{i+1}. {e.title or 'N/A'}\n"
        f"   {e.url}\n"
        f"   {e.thumbnail_url or ''}\n"
        for i, e in enumerate(entries)
    )
    return body + ("\n… more on next page" if has_next else "")
