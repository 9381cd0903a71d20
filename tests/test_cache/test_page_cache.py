"""Tests for modiokit.cache -- collection keys, PageCache and the global instance."""

from __future__ import annotations

import threading

import pytest

from modiokit.cache import (
    PageCache,
    canonical_collection_key,
    get_page_cache,
    reset_page_cache,
    set_page_cache,
)
from modiokit.models import ModBatch, ModId, ModPage, ModProfile, PageCacheConfig, PageRequest


def _batch(first_id: int, count: int, total: int) -> ModBatch:
    return ModBatch(
        total_search_results_found=total,
        slots=tuple(ModProfile(id=ModId(i)) for i in range(first_id, first_id + count)),
    )


def _ids(page: ModPage) -> list[int]:
    return [int(p.id) for p in page.mod_profiles]


KEY = "https://api.mod.io/v1/games/1/mods"


# ---------------------------------------------------------------------------
# canonical_collection_key
# ---------------------------------------------------------------------------


class TestCanonicalCollectionKey:
    def test_plain_url(self) -> None:
        assert canonical_collection_key(KEY) == KEY

    def test_paging_params_removed(self) -> None:
        assert canonical_collection_key(f"{KEY}?_offset=30&_limit=100") == KEY

    def test_other_params_kept_and_sorted(self) -> None:
        a = canonical_collection_key(f"{KEY}?tags=maps&_sort=-popular&_limit=10")
        b = canonical_collection_key(f"{KEY}?_offset=20&_sort=-popular&tags=maps")
        assert a == b
        assert a == f"{KEY}?_sort=-popular&tags=maps"

    def test_different_filters_differ(self) -> None:
        assert canonical_collection_key(f"{KEY}?tags=maps") != canonical_collection_key(
            f"{KEY}?tags=skins"
        )

    def test_trailing_slash_and_fragment_ignored(self) -> None:
        assert canonical_collection_key(f"{KEY}/#top") == KEY

    def test_host_case_normalised(self) -> None:
        assert canonical_collection_key("https://API.MOD.IO/v1/games/1/mods") == KEY

    def test_relative_url(self) -> None:
        assert canonical_collection_key("/v1/games/1/mods?_limit=5") == "/v1/games/1/mods"


# ---------------------------------------------------------------------------
# PageCache
# ---------------------------------------------------------------------------


class TestPutAndGet:
    def test_round_trip(self, page_cache: PageCache) -> None:
        batch = _batch(1, 100, 500)
        page_cache.put(KEY, 0, batch)
        assert page_cache.get(KEY, 0) is batch

    def test_miss(self, page_cache: PageCache) -> None:
        assert page_cache.get(KEY, 0) is None
        page_cache.put(KEY, 0, _batch(1, 100, 500))
        assert page_cache.get(KEY, 100) is None
        assert page_cache.get("other", 0) is None

    def test_last_write_wins(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 100, 500))
        newer = _batch(1, 100, 501)
        page_cache.put(KEY, 0, newer)
        assert page_cache.get(KEY, 0) is newer

    def test_negative_offset_rejected(self, page_cache: PageCache) -> None:
        with pytest.raises(ValueError):
            page_cache.put(KEY, -1, _batch(1, 1, 1))


class TestGetWindow:
    def test_sub_range_of_batch(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 100, 500))
        page = page_cache.get_window(KEY, PageRequest(page_size=10, page_index=3))
        assert page is not None
        assert _ids(page) == list(range(31, 41))
        assert page.total_search_results_found == 500

    def test_batch_at_later_offset(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 100, _batch(101, 100, 500))
        page = page_cache.get_window(KEY, PageRequest(page_size=20, page_index=6))
        assert page is not None
        assert _ids(page) == list(range(121, 141))

    def test_partial_coverage_misses(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 100, 500))
        assert page_cache.get_window(KEY, PageRequest(page_size=30, page_index=3)) is None

    def test_page_before_batch_misses(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 100, _batch(101, 100, 500))
        assert page_cache.get_window(KEY, PageRequest(page_size=10, page_index=0)) is None

    def test_tail_of_collection(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 95, 95))
        page = page_cache.get_window(KEY, PageRequest(page_size=10, page_index=9))
        assert page is not None
        assert _ids(page) == [91, 92, 93, 94, 95]

    def test_past_end_of_collection(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 95, 95))
        page = page_cache.get_window(KEY, PageRequest(page_size=10, page_index=12))
        assert page is not None
        assert page.mod_profiles == ()
        assert page.total_search_results_found == 95

    def test_empty_slot_keeps_positions(self, page_cache: PageCache) -> None:
        slots = list(_batch(1, 100, 100).slots)
        slots[1] = None
        page_cache.put(KEY, 0, ModBatch(total_search_results_found=100, slots=tuple(slots)))

        later = page_cache.get_window(KEY, PageRequest(page_size=10, page_index=3))
        first = page_cache.get_window(KEY, PageRequest(page_size=10, page_index=0))
        assert later is not None and first is not None
        assert _ids(later) == list(range(31, 41))
        assert _ids(first) == [1, 3, 4, 5, 6, 7, 8, 9, 10]
        assert page_cache.stats()["records"] == 99

    def test_unknown_key(self, page_cache: PageCache) -> None:
        assert page_cache.get_window(KEY, PageRequest(page_size=10)) is None


class TestInvalidation:
    def test_invalidate_one_collection(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 10, 10))
        page_cache.put("other", 0, _batch(1, 10, 10))
        page_cache.invalidate(KEY)
        assert page_cache.get(KEY, 0) is None
        assert page_cache.get("other", 0) is not None

    def test_invalidate_unknown_key(self, page_cache: PageCache) -> None:
        page_cache.invalidate("nothing-here")

    def test_clear(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 10, 10))
        page_cache.put("other", 0, _batch(1, 10, 10))
        page_cache.clear()
        assert page_cache.stats()["entries"] == 0


class TestStats:
    def test_counts(self, page_cache: PageCache) -> None:
        page_cache.put(KEY, 0, _batch(1, 100, 500))
        page_cache.put(KEY, 100, _batch(101, 100, 500))
        page_cache.put("other", 0, _batch(1, 5, 5))
        assert page_cache.stats() == {
            "enabled": True,
            "collections": 2,
            "entries": 3,
            "records": 205,
        }


class TestDisabledCache:
    def test_put_is_noop(self) -> None:
        cache = PageCache(PageCacheConfig(enabled=False))
        cache.put(KEY, 0, _batch(1, 10, 10))
        assert cache.get(KEY, 0) is None
        assert cache.get_window(KEY, PageRequest(page_size=5)) is None
        assert cache.stats()["entries"] == 0
        assert cache.enabled is False


class TestConcurrency:
    def test_concurrent_puts(self, page_cache: PageCache) -> None:
        """Writers on distinct offsets never lose an entry."""
        errors: list[BaseException] = []

        def writer(worker: int) -> None:
            try:
                for i in range(50):
                    offset = (worker * 50 + i) * 10
                    page_cache.put(KEY, offset, _batch(offset + 1, 10, 10_000))
                    page_cache.get_window(KEY, PageRequest(page_size=10, page_index=offset // 10))
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        stats = page_cache.stats()
        assert stats["entries"] == 400
        assert stats["records"] == 4000

    def test_concurrent_same_key(self, page_cache: PageCache) -> None:
        batches = [_batch(1, 10, total) for total in range(16)]

        threads = [
            threading.Thread(target=page_cache.put, args=(KEY, 0, batch)) for batch in batches
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stored = page_cache.get(KEY, 0)
        assert any(stored is batch for batch in batches)


# ---------------------------------------------------------------------------
# Global instance
# ---------------------------------------------------------------------------


class TestGlobalCache:
    def test_lazy_singleton(self) -> None:
        assert get_page_cache() is get_page_cache()

    def test_set_and_reset(self) -> None:
        custom = PageCache()
        set_page_cache(custom)
        assert get_page_cache() is custom
        reset_page_cache()
        assert get_page_cache() is not custom
