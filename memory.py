# memory.py — 2026-10-19
"""
In-memory cache of the categories a site exposes.

Filled at most once per adapter: either opportunistically from an ordinary
page load (`offer`) or by an explicit, attempt-capped fetch
(`ensure_populated`). All state changes go through those two calls.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple

from models import CategoryEntry
from utils import Attempt, best_effort

logger = logging.getLogger(__name__)

Loader = Callable[[], List[CategoryEntry]]


class CategoryCache:
    """Discovered categories plus the bookkeeping for bounded retries."""

    def __init__(self, loader: Loader, max_attempts: int = 3,
                 accept: Optional[Callable[[List[CategoryEntry]], bool]] = None) -> None:
        self._loader = loader
        self._accept = accept or bool
        self.max_attempts = max_attempts

        # Reentrant: the loader's own request passes through the interceptor,
        # which may call offer() on this thread while we hold the lock.
        self._lock = threading.RLock()
        self._entries: Tuple[CategoryEntry, ...] = ()
        self._attempts = 0

    # ---------- read side ----------
    @property
    def populated(self) -> bool:
        return bool(self._entries)

    @property
    def attempts_made(self) -> int:
        return self._attempts

    @property
    def entries(self) -> List[CategoryEntry]:
        return list(self._entries)

    # ---------- write side ----------
    def _adopt(self, entries: List[CategoryEntry], source: str) -> bool:
        # caller holds the lock
        if self._entries or not self._accept(entries):
            return False
        seen, unique = set(), []
        for entry in entries:
            if entry.key in seen:
                continue
            seen.add(entry.key)
            unique.append(entry)
        self._entries = tuple(unique)
        logger.info("categories populated from %s (%d entries)", source, len(unique))
        return True

    def offer(self, entries: List[CategoryEntry]) -> bool:
        """Adopt `entries` if nothing is cached yet. Never uses an attempt."""
        with self._lock:
            return self._adopt(list(entries), "page load")

    def ensure_populated(self) -> Attempt:
        """
        One explicit fetch, unless already populated or out of attempts.

        The attempt counter is bumped whether the fetch works or not.
        """
        with self._lock:
            if self._entries:
                return Attempt(True, self.entries)
            if self._attempts >= self.max_attempts:
                logger.debug("category discovery gave up after %d attempts", self._attempts)
                return Attempt(False)
            result = best_effort(self._loader, label="category fetch")
            self._attempts += 1
            if result.ok:
                self._adopt(result.value or [], f"attempt {self._attempts}")
            if self._entries:
                return Attempt(True, self.entries)
            logger.warning("category discovery attempt %d/%d yielded nothing",
                           self._attempts, self.max_attempts)
            return Attempt(False, error=result.error)
