"""Tests for the category cache: attempt cap, first-writer-wins, thread safety."""

import threading
from unittest.mock import MagicMock

from memory import CategoryCache
from models import CategoryEntry
from parser import has_usable_categories

ALL = CategoryEntry("All", "")
ROMANCE = CategoryEntry("Romance", "category/romance")
ACTION = CategoryEntry("Action", "tag/action")


def test_attempt_cap_stops_network_calls():
    loader = MagicMock(side_effect=ConnectionError("down"))
    cache = CategoryCache(loader, max_attempts=3)

    for _ in range(6):
        result = cache.ensure_populated()
        assert not result.ok

    assert loader.call_count == 3
    assert cache.attempts_made == 3
    assert not cache.populated


def test_failed_attempts_then_success():
    loader = MagicMock(side_effect=[ConnectionError("down"), [ALL, ROMANCE]])
    cache = CategoryCache(loader)

    assert not cache.ensure_populated().ok
    assert cache.ensure_populated().ok
    assert cache.entries == [ALL, ROMANCE]
    assert cache.attempts_made == 2


def test_empty_result_counts_as_failed_attempt():
    loader = MagicMock(return_value=[ALL])
    cache = CategoryCache(loader, accept=has_usable_categories)

    for _ in range(4):
        cache.ensure_populated()

    assert loader.call_count == 3
    assert not cache.populated


def test_populated_cache_is_never_refetched_or_replaced():
    loader = MagicMock(return_value=[ALL, ROMANCE])
    cache = CategoryCache(loader)
    cache.ensure_populated()

    assert not cache.offer([ALL, ACTION])
    cache.ensure_populated()
    cache.ensure_populated()

    assert loader.call_count == 1
    assert cache.entries == [ALL, ROMANCE]


def test_offer_populates_without_using_an_attempt():
    loader = MagicMock()
    cache = CategoryCache(loader)

    assert cache.offer([ALL, ROMANCE, ACTION])
    assert cache.ensure_populated().ok
    loader.assert_not_called()
    assert cache.attempts_made == 0


def test_offer_after_exhaustion_still_works():
    cache = CategoryCache(MagicMock(side_effect=OSError), max_attempts=1)
    cache.ensure_populated()
    assert cache.offer([ALL, ROMANCE])
    assert cache.entries == [ALL, ROMANCE]


def test_offer_rejected_by_accept_policy():
    cache = CategoryCache(MagicMock(), accept=has_usable_categories)
    assert not cache.offer([ALL])
    assert not cache.populated


def test_keys_unique_first_occurrence_wins():
    cache = CategoryCache(MagicMock())
    cache.offer([ALL, ROMANCE, CategoryEntry("Romance again", "category/romance"), ACTION])
    assert cache.entries == [ALL, ROMANCE, ACTION]


def test_concurrent_callers_single_winner():
    calls = []
    barrier = threading.Barrier(8)

    def loader():
        calls.append(1)
        return [ALL, CategoryEntry(f"Winner {len(calls)}", f"category/w{len(calls)}")]

    cache = CategoryCache(loader)

    def worker(i):
        barrier.wait()
        if i % 2:
            cache.offer([ALL, CategoryEntry(f"Offer {i}", f"tag/o{i}")])
        else:
            cache.ensure_populated()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    snapshot = cache.entries
    assert len(snapshot) == 2
    assert len(calls) <= 1
    cache.offer([ALL, ACTION])
    cache.ensure_populated()
    assert cache.entries == snapshot


def test_loader_may_offer_reentrantly():
    # the explicit fetch goes through the interceptor on the same thread
    holder = {}

    def loader():
        holder["cache"].offer([ALL, ACTION])
        return [ALL, ROMANCE]

    cache = CategoryCache(loader)
    holder["cache"] = cache
    assert cache.ensure_populated().ok
    assert cache.entries == [ALL, ACTION]
    assert cache.attempts_made == 1
