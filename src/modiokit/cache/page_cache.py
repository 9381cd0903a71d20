"""In-memory cache of converted mod batches.

The service never returns fewer than a fixed minimum number of mods per
request, while callers often ask for much smaller pages. Rather than
discard the surplus, the translator stores every converted batch here so
that the next page of the same query can be served without a fetch.

Entries are keyed by ``(collection key, batch offset)``. The collection key
comes from :func:`canonical_collection_key`, which removes the paging
parameters from the request URL, so the same query asked for with
different page sizes lands on the same entries. A stored batch is always
the full fetch result, never the page that was handed back to the caller,
and it keeps one slot per wire record so that a record with no valid
identity does not shift the records after it.

There is no expiry. Freshness belongs to whoever fetches: call
:meth:`PageCache.invalidate` or :meth:`PageCache.clear` when the data is
known to be stale.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import httpx

from modiokit.models import ModBatch, ModPage, PageCacheConfig, PageRequest

logger = logging.getLogger(__name__)

PAGING_PARAMS = frozenset({"_offset", "_limit"})
"""Query parameters that select a window of a collection rather than the collection itself."""


def canonical_collection_key(url: str) -> str:
    """Reduce a request URL to a key identifying its logical collection.

    Paging parameters are dropped, the remaining query parameters are
    sorted, and the fragment and any trailing slash are removed. Scheme and
    host are normalised by :class:`httpx.URL`.

    Args:
        url: Absolute or path-only request URL.

    Returns:
        A string such as ``https://api.mod.io/v1/games/1/mods?tags=maps``.

    Example::

        canonical_collection_key("https://API.mod.io/v1/games/1/mods?_limit=10&_offset=30")
        # -> "https://api.mod.io/v1/games/1/mods"
    """
    parsed = httpx.URL(url)
    params = sorted(
        (name, value)
        for name, value in parsed.params.multi_items()
        if name not in PAGING_PARAMS
    )
    path = parsed.path.rstrip("/") or "/"

    if parsed.is_absolute_url:
        key = f"{parsed.scheme}://{parsed.netloc.decode('ascii')}{path}"
    else:
        key = path
    if params:
        key = f"{key}?{httpx.QueryParams(params)}"
    return key


class PageCache:
    """Thread-safe store of converted mod batches.

    Every read and write of the underlying mapping happens under one
    :class:`threading.Lock`; the mapping itself is never handed out.
    Stored :class:`~modiokit.models.ModBatch` objects are frozen, so
    returning them directly does not let callers alter the cache.

    Args:
        config: Cache settings. When ``enabled`` is false, :meth:`put`
            is a no-op and every lookup misses.

    Example::

        cache = PageCache()
        key = canonical_collection_key("https://api.mod.io/v1/games/1/mods")
        cache.put(key, 0, batch)
        cache.get(key, 0)                                         # batch
        cache.get_window(key, PageRequest(page_size=10, page_index=2))  # records 20..29
    """

    def __init__(self, config: Optional[PageCacheConfig] = None) -> None:
        self._config = config or PageCacheConfig()
        self._lock = threading.Lock()
        self._entries: dict[str, dict[int, ModBatch]] = {}

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def put(self, key: str, offset: int, batch: ModBatch) -> None:
        """Store *batch* as the records of collection *key* starting at *offset*.

        An existing entry at the same ``(key, offset)`` is replaced.

        Args:
            key: Canonical collection key.
            offset: Logical index of the batch's first record.
            batch: The complete converted fetch result.
        """
        if not self._config.enabled:
            return
        if offset < 0:
            raise ValueError(f"batch offset must be >= 0, got {offset}")
        with self._lock:
            self._entries.setdefault(key, {})[offset] = batch
        logger.debug(
            "Cached %d mods for %s at offset %d",
            len(batch.slots),
            key,
            offset,
        )

    def get(self, key: str, offset: int) -> Optional[ModBatch]:
        """Return the batch stored at exactly ``(key, offset)``, or ``None``."""
        if not self._config.enabled:
            return None
        with self._lock:
            return self._entries.get(key, {}).get(offset)

    def get_window(self, key: str, request: PageRequest) -> Optional[ModPage]:
        """Serve a page from any cached batch of *key* that covers it.

        A batch covers the page when it starts at or before the page offset
        and either holds every requested record or runs to the end of the
        collection (in which case the page is shorter, possibly empty).

        Args:
            key: Canonical collection key.
            request: The page the caller asked for.

        Returns:
            A :class:`~modiokit.models.ModPage` with the batch's total and
            at most ``request.page_size`` profiles, or ``None`` on a miss.
            Slots of invalid records inside the window are skipped, so the
            page matches what translating the same fetch returns.
        """
        if not self._config.enabled:
            return None

        offset = request.offset
        with self._lock:
            batches = list(self._entries.get(key, {}).items())

        for start, batch in batches:
            end = start + len(batch.slots)
            if start > offset:
                continue
            if end >= offset + request.page_size or end >= batch.total_search_results_found:
                logger.debug("Page cache hit for %s at offset %d", key, offset)
                return batch.window(offset - start, request.page_size)

        logger.debug("Page cache miss for %s at offset %d", key, offset)
        return None

    def invalidate(self, key: str) -> None:
        """Drop every batch stored for collection *key*."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every batch of every collection."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), ``collections`` (number of
            keys), ``entries`` (number of stored batches) and ``records``
            (valid profiles across all batches).
        """
        with self._lock:
            entries = [batch for batches in self._entries.values() for batch in batches.values()]
            collections = len(self._entries)
        return {
            "enabled": self._config.enabled,
            "collections": collections,
            "entries": len(entries),
            "records": sum(len(batch.mod_profiles) for batch in entries),
        }


# ------------------------------------------------------------------ #
# Process-wide cache instance
# ------------------------------------------------------------------ #

_page_cache: Optional[PageCache] = None
_page_cache_lock = threading.Lock()


def get_page_cache() -> PageCache:
    """Return the process-wide :class:`PageCache`, creating it on first use."""
    global _page_cache
    with _page_cache_lock:
        if _page_cache is None:
            _page_cache = PageCache()
        return _page_cache


def set_page_cache(cache: PageCache) -> None:
    """Install *cache* as the process-wide :class:`PageCache`."""
    global _page_cache
    with _page_cache_lock:
        _page_cache = cache


def reset_page_cache() -> None:
    """Forget the process-wide :class:`PageCache`.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _page_cache
    with _page_cache_lock:
        _page_cache = None
