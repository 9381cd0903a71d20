"""In-memory page caching for modiokit.

This package provides :class:`PageCache`, which keeps every converted batch
of mods keyed by the paging-free form of the request URL and the batch
offset, so that later pages inside an already-fetched batch need no new
request.

The translator writes to the process-wide instance returned by
:func:`get_page_cache` unless a cache is passed explicitly. Callers read
from it with :meth:`PageCache.get_window` before fetching.
"""

from modiokit.cache.page_cache import (
    PAGING_PARAMS,
    PageCache,
    canonical_collection_key,
    get_page_cache,
    reset_page_cache,
    set_page_cache,
)

__all__ = [
    "PAGING_PARAMS",
    "PageCache",
    "canonical_collection_key",
    "get_page_cache",
    "reset_page_cache",
    "set_page_cache",
]
