# config.py — 2026-10-19
"""
Per-site configuration for OceanWP-themed sources.

One dataclass covers the three historical flavours of the adapter; the
differences between them live in `VARIANTS` instead of subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

PERMISSIVE  = "permissive"
RESTRICTIVE = "restrictive"

DEFAULT_CATEGORY_SELECTOR = "ul.megamenu li a, .post-tags a, .meta-category a, .tagcloud a"
DEFAULT_DATE_FORMAT       = "%Y-%m-%dT%H:%M:%S%z"


@dataclass
class SiteConfig:
    """Everything a caller supplies for one site instance."""

    base_url: str
    name: str = "OceanWP"
    lang: str = "en"

    # Category discovery
    category_selector: str = DEFAULT_CATEGORY_SELECTOR
    categories_path: str = ""
    classifier: str = PERMISSIVE
    bucket_names: Tuple[str, ...] = ("category", "tag", "genre")
    category_url_delimiter: str = "/"
    intercept_categories: bool = True
    max_category_attempts: int = 3

    # Filters
    use_tags: bool = True
    filter_headers: bool = False

    # Search
    search_param: str = "s"
    probe_buckets: Tuple[str, ...] = ("", "genre", "category", "tag")
    default_bucket: str = "category"
    probe_method: str = "GET"

    # Listing
    item_selector: str = "article.blog-entry, article.entry"
    item_title_selector: str = ".blog-entry-title a, .entry-title a"
    item_thumbnail_selector: str = ".thumbnail img, img"
    next_page_selector: str = "ul.page-numbers a.next"

    # Details / pages
    title_selector: str = "h1.single-post-title, h1.entry-title, h2.single-post-title, h2.entry-title"
    content_selector: str = ".entry-content, .entry"
    genre_selector: str = '.meta-cat a[rel="category tag"], .meta-category a'
    thumbnail_selector: str = ".entry-header img, .thumbnail img"
    published_selector: str = "time.published"
    page_image_selector: str = ".entry-content img, .entry img, .gallery-icon img"
    date_format: str = DEFAULT_DATE_FORMAT

    # Transport
    timeout: int = 10
    retries: int = 2

    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.classifier not in (PERMISSIVE, RESTRICTIVE):
            raise ValueError(f"unknown classifier policy: {self.classifier!r}")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL: {self.base_url!r}")
        self.base_url = self.base_url.rstrip("/")

    @property
    def restrictive(self) -> bool:
        return self.classifier == RESTRICTIVE

    @classmethod
    def for_variant(cls, variant: str, base_url: str, **overrides: Any) -> "SiteConfig":
        """Build a config from one of the named presets in `VARIANTS`."""
        try:
            preset = VARIANTS[variant]
        except KeyError:
            raise ValueError(f"unknown variant: {variant!r}") from None
        return cls(base_url=base_url, **{**preset, **overrides})

    @classmethod
    def from_args(cls, args) -> "SiteConfig":
        """Create configuration from parsed command line options."""
        overrides: Dict[str, Any] = {}
        if getattr(args, "classifier", None):
            overrides["classifier"] = args.classifier
        if getattr(args, "no_tags", False):
            overrides["use_tags"] = False
        if getattr(args, "no_intercept", False):
            overrides["intercept_categories"] = False
        if getattr(args, "selector", None):
            overrides["category_selector"] = args.selector
        return cls.for_variant(getattr(args, "variant", "megamenu"), args.site, **overrides)

    def with_overrides(self, **changes: Any) -> "SiteConfig":
        return replace(self, **changes)


# megamenu:    generic two-segment keys harvested from menus and tag clouds
# restrictive: only category/tag/genre links count, tags hidden
# annotated:   restrictive keys plus "All" tag entry and explanatory headers
VARIANTS: Dict[str, Dict[str, Any]] = {
    "megamenu": {
        "classifier": PERMISSIVE,
    },
    "restrictive": {
        "classifier": RESTRICTIVE,
        "use_tags": False,
    },
    "annotated": {
        "classifier": RESTRICTIVE,
        "filter_headers": True,
    },
}
