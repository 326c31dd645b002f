#parser.py
"""
HTML side of the adapter: path classification, category harvesting and the
template-driven field extraction for listings, details and image pages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from config import SiteConfig
from models import (ALL_ENTRY, CategoryEntry, Chapter, EntriesPage, Entry,
                    EntryDetails, Page)
from utils import best_effort, parse_date_millis, url_without_domain

logger = logging.getLogger(__name__)

_HTTP_RE = re.compile(r"https?://.*", re.I)
_THUMB_SIZES = ("-200x285", "-150x", "-100x")


class ParseError(ValueError):
    """A required element is missing from a caller-supplied document."""


class Document:
    """A parsed page plus the URL it came from, for resolving relative links."""

    def __init__(self, html: str, url: str = "") -> None:
        self.url = url
        self.soup = BeautifulSoup(html or "", "html.parser")

    @classmethod
    def from_response(cls, response) -> "Document":
        return cls(response.text, response.url)

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def abs_url(self, element: Tag, attr: str = "href") -> str:
        """Absolute form of `element[attr]`, "" when the attribute is absent."""
        raw = (element.get(attr) or "").strip()
        if not raw:
            return ""
        return urljoin(self.url, raw)

    def require(self, selector: str, what: str) -> Tag:
        el = self.select_one(selector)
        if el is None:
            raise ParseError(f"missing {what} ({selector}) in {self.url or 'document'}")
        return el


# ─────────────────────── path classification ───────────────────────
def _tail_key(parts: List[str], restrictive: bool, buckets: Iterable[str]) -> str:
    if len(parts) >= 2:
        if restrictive and parts[-2].lower() not in buckets:
            return ""
        return f"{parts[-2]}/{parts[-1]}"
    return parts[-1] if parts else ""


def _classify(abs_href: str, raw_href: str, restrictive: bool,
              buckets: Iterable[str], delimiter: str) -> str:
    url = urlparse(abs_href)
    if url.scheme in ("http", "https") and url.netloc:
        segs = [s for s in url.path.split("/") if s]
    else:
        cleaned = raw_href.strip()
        if cleaned.endswith(delimiter):
            cleaned = cleaned[: -len(delimiter)]
        segs = [s for s in cleaned.split(delimiter) if s]
    return _tail_key(segs, restrictive, buckets)


def classify_path(href: str, *, restrictive: bool = False,
                  buckets: Iterable[str] = ("category", "tag", "genre"),
                  delimiter: str = "/", raw_href: Optional[str] = None) -> str:
    """
    Normalised `"<bucket>/<slug>"` key for a link, or "".

    `href` is the resolved absolute URL when one is available; `raw_href` is
    the attribute as written, used when `href` does not parse as an http(s)
    URL. Never raises.
    """
    buckets = {b.lower() for b in buckets}
    attempt = best_effort(_classify, href or "", raw_href if raw_href is not None else href or "",
                          restrictive, buckets, delimiter or "/", label="classify_path")
    return attempt.value if attempt.ok else ""


# ─────────────────────── category harvesting ───────────────────────
def _entry_for(document: Document, el: Tag, config: SiteConfig) -> CategoryEntry:
    label = el.get_text(" ", strip=True)
    resolved = best_effort(document.abs_url, el, label="abs_url")
    key = classify_path(
        resolved.value if resolved.ok else "",
        restrictive=config.restrictive,
        buckets=config.bucket_names,
        delimiter=config.category_url_delimiter,
        raw_href=el.get("href") or "",
    )
    return CategoryEntry(label, key)


def parse_categories(document: Document, config: SiteConfig,
                     selector: Optional[str] = None) -> List[CategoryEntry]:
    """
    `[All] + one entry per matched anchor`, in document order.

    Duplicates are kept here; the cache and the filter presenter dedupe.
    """
    out = [ALL_ENTRY]
    for el in document.select(selector or config.category_selector):
        out.append(_entry_for(document, el, config))
    logger.debug("%d category links on %s", len(out) - 1, document.url or "document")
    return out


def has_usable_categories(entries: List[CategoryEntry]) -> bool:
    """True when `entries` holds something besides the "All" sentinel."""
    return any(e.key for e in entries)


# ─────────────────────────── images ────────────────────────────────
def image_or_none(document: Document, element: Tag) -> Optional[str]:
    """First usable lazy-load or plain image attribute, made absolute."""
    for attr in ("data-original", "data-src", "data-lazy-src", "data-srcset", "src"):
        raw = (element.get(attr) or "").strip()
        if not raw:
            continue
        absolute = document.abs_url(element, attr)
        if not _HTTP_RE.fullmatch(absolute):
            continue
        if attr == "data-srcset":
            first = absolute.split(",")[0].strip()
            return first.split()[0] if first else None
        return absolute
    return None


def _is_junk_image(url: str) -> bool:
    low = url.lower()
    if "logo" in low:
        return True
    return "wp-content/uploads/" in low and any(s in url for s in _THUMB_SIZES)


def parse_page_list(document: Document, config: SiteConfig) -> List[Page]:
    seen, urls = set(), []
    for img in document.select(config.page_image_selector):
        url = image_or_none(document, img)
        if url and url not in seen:
            seen.add(url)
            urls.append(url)
    return [Page(i, url) for i, url in enumerate(u for u in urls if not _is_junk_image(u))]


# ─────────────────────────── listings ──────────────────────────────
def parse_entry(document: Document, element: Tag, config: SiteConfig) -> Optional[Entry]:
    link = element.select_one(config.item_title_selector)
    if link is None:
        return None
    img = element.select_one(config.item_thumbnail_selector)
    return Entry(
        url=url_without_domain(document.abs_url(link)),
        title=link.get_text(" ", strip=True),
        thumbnail_url=image_or_none(document, img) if img is not None else None,
    )


def parse_listing(document: Document, config: SiteConfig) -> EntriesPage:
    """One listing page; popular, latest and search results share it."""
    entries = []
    for el in document.select(config.item_selector):
        entry = parse_entry(document, el, config)
        if entry is not None:
            entries.append(entry)
    has_next = document.select_one(config.next_page_selector) is not None
    return EntriesPage(entries, has_next)


# ─────────────────────────── details ───────────────────────────────
def _author(content: Tag) -> Optional[str]:
    for li in content.select("li"):
        if "artists" in li.get_text(" ", strip=True).lower():
            em = li.select_one("em")
            return em.get_text(" ", strip=True) if em is not None else None
    return None


def parse_details(document: Document, config: SiteConfig) -> EntryDetails:
    """Raises `ParseError` when the title or the content body is missing."""
    title = document.require(config.title_selector, "title").get_text(" ", strip=True)
    content = document.require(config.content_selector, "content")

    paragraphs = (p.get_text(" ", strip=True) for p in content.select("p"))
    genres = (a.get_text(" ", strip=True) for a in document.select(config.genre_selector))
    thumb = document.select_one(config.thumbnail_selector)

    return EntryDetails(
        title=title,
        description="\n".join(t for t in paragraphs if t),
        genre=", ".join(genres),
        author=_author(content),
        thumbnail_url=(document.abs_url(thumb, "src") or None) if thumb is not None else None,
    )


def parse_chapters(document: Document, config: SiteConfig) -> List[Chapter]:
    """Every entry is a single chapter: the post itself."""
    title = document.require(config.title_selector, "title").get_text(" ", strip=True)
    published = document.select_one(config.published_selector)
    stamp = published.get("datetime", "") if published is not None else ""
    return [Chapter(
        name=title,
        url=url_without_domain(document.url),
        date_upload=parse_date_millis(stamp, config.date_format),
    )]
