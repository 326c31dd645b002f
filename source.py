# source.py — 2026-10-19
"""
OceanWP source: wires the fetcher, category cache, interceptor, search
resolver and filter presenter behind the calls a host application makes.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

import requests

from config import SiteConfig
from fetcher import Fetcher, default_headers
from filters import FilterList, keys_from_filters, present_filters
from interceptor import CategoryInterceptor
from memory import CategoryCache
from models import (CategoryEntry, Chapter, EntriesPage, EntryDetails, Page,
                    Request, SearchFilterSelection)
from parser import (Document, has_usable_categories, parse_categories,
                    parse_chapters, parse_details, parse_listing,
                    parse_page_list)
from utils import best_effort, page_path_segment
from web_search import SearchResolver

logger = logging.getLogger(__name__)


class OceanWP:
    """One configured site."""

    def __init__(self, config: SiteConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.headers = {**default_headers(config.base_url), **config.extra_headers}
        self.fetcher = fetcher or Fetcher(headers=self.headers,
                                          timeout=config.timeout,
                                          retries=config.retries)

        self.categories = CategoryCache(self._load_categories,
                                        max_attempts=config.max_category_attempts,
                                        accept=has_usable_categories)
        if config.intercept_categories:
            self.fetcher.add_interceptor(CategoryInterceptor(self.categories, self.parse_categories))

        self.resolver = SearchResolver(config, self.fetcher, self.headers)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _get(self, url: str) -> Request:
        return Request(url, headers=dict(self.headers))

    # ---------- categories ----------
    def parse_categories(self, document: Document) -> List[CategoryEntry]:
        return parse_categories(document, self.config)

    def categories_request(self) -> Request:
        path = self.config.categories_path.strip("/")
        return self._get(f"{self.base_url}/{path}" if path else self.base_url)

    def _load_categories(self) -> List[CategoryEntry]:
        # one attempt = one request, the cache does the retrying
        doc = self.fetcher.fetch_document(self.categories_request(), retries=0)
        return self.parse_categories(doc)

    # ---------- popular / latest ----------
    def popular_request(self, page: int) -> Request:
        return self._get(f"{self.base_url}/{page_path_segment(page)}")

    def latest_request(self, page: int) -> Request:
        return self.popular_request(page)

    def _listing(self, request: Request) -> EntriesPage:
        return parse_listing(self.fetcher.fetch_document(request), self.config)

    def list_popular(self, page: int = 1) -> EntriesPage:
        return self._listing(self.popular_request(page))

    def list_latest(self, page: int = 1) -> EntriesPage:
        return self._listing(self.latest_request(page))

    # ---------- search ----------
    def search_request(self, page: int, query: str = "",
                       selection: Union[SearchFilterSelection, FilterList, Iterable[str], None] = None,
                       strict: bool = False) -> Request:
        if isinstance(selection, SearchFilterSelection):
            query = query or selection.query
            keys = selection.selected_keys
        elif isinstance(selection, FilterList):
            keys = keys_from_filters(selection)
        else:
            keys = list(selection or [])
        return self.resolver.resolve(page, query, keys, strict=strict)

    def search(self, page: int = 1, query: str = "",
               selection: Union[SearchFilterSelection, FilterList, Iterable[str], None] = None,
               strict: bool = False) -> EntriesPage:
        return self._listing(self.search_request(page, query, selection, strict=strict))

    # ---------- details / chapters / pages ----------
    def fetch_details(self, document: Document) -> EntryDetails:
        return parse_details(document, self.config)

    def fetch_chapter_list(self, response: requests.Response) -> List[Chapter]:
        return parse_chapters(Document.from_response(response), self.config)

    def fetch_page_list(self, document: Document) -> List[Page]:
        return parse_page_list(document, self.config)

    # ---------- filters ----------
    def get_filter_options(self) -> FilterList:
        # never fails: an unreachable site just yields the placeholder
        best_effort(self.categories.ensure_populated, label="ensure categories")
        return present_filters(self.categories.entries,
                               use_tags=self.config.use_tags,
                               headers=self.config.filter_headers)
