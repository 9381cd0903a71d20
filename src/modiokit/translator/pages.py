"""Translation of mod listings into pages, with page-cache population.

The service answers every list request with a batch of at least
``min_batch_size`` mods, however small the page the caller wants. Both
envelopes that carry mod lists are reduced to a :class:`RawBatch` (total,
mods, logical offset of the first mod) by a small adapter, and one shared
routine then:

1. converts the whole batch,
2. stores the converted batch in the :class:`~modiokit.cache.PageCache`
   under the batch offset, one slot per wire record so that positions
   stay aligned with logical indices even when a record is invalid,
3. returns only the mods at logical indices
   ``[offset, offset + page_size)``, bounded by what the batch holds.

The two adapters differ only in where the batch starts:

* :func:`mod_page_from_listing` -- the listing envelope was fetched at the
  page offset, so its first mod *is* the first mod of the page.
* :func:`mod_page_from_paginated` -- the general envelope reports its own
  start in ``result_offset`` (0 when absent), and the page is cut out of
  the batch at ``offset - result_offset``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from modiokit.cache import PageCache, canonical_collection_key, get_page_cache
from modiokit.models import ModBatch, ModPage, PageRequest
from modiokit.translator.coerce import as_wire
from modiokit.translator.mods import mod_profile_from_wire
from modiokit.wire import GetModsResponse, ModObject, PaginatedResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawBatch:
    """One fetched batch of mods, independent of the envelope it came in."""

    total: int
    mods: list[ModObject]
    start: int


def mod_page_from_listing(
    response: Union[GetModsResponse, dict[str, Any], None],
    request: PageRequest,
    collection_url: str,
    cache: Optional[PageCache] = None,
) -> ModPage:
    """Translate a mod listing fetched at ``request.offset``.

    Args:
        response: The listing envelope, or ``None`` when nothing was
            received.
        request: The page the caller asked for.
        collection_url: The request URL; paging parameters are ignored
            when deriving the cache key.
        cache: Cache to populate. Defaults to the process-wide cache.

    Returns:
        The requested page. An absent response gives an empty page.

    Raises:
        WireFormatError: If the envelope does not fit the listing shape.
    """
    if response is None:
        return ModPage()
    wire = as_wire(GetModsResponse, response)
    mods = wire.data or []
    batch = RawBatch(
        total=_total(wire.result_total, request.offset, mods),
        mods=mods,
        start=request.offset,
    )
    return _page_from_batch(batch, request, collection_url, cache)


def mod_page_from_paginated(
    response: Union[PaginatedResponse, dict[str, Any], None],
    request: PageRequest,
    collection_url: str,
    cache: Optional[PageCache] = None,
) -> ModPage:
    """Translate a general paginated envelope of mods.

    Arguments and return value are as for :func:`mod_page_from_listing`.
    """
    if response is None:
        return ModPage()
    wire = as_wire(PaginatedResponse[ModObject], _unwrap(response))
    mods = wire.data or []
    start = max(wire.result_offset or 0, 0)
    batch = RawBatch(
        total=_total(wire.result_total, start, mods),
        mods=mods,
        start=start,
    )
    return _page_from_batch(batch, request, collection_url, cache)


def _unwrap(response: Union[PaginatedResponse, dict[str, Any]]) -> Any:
    # An envelope parametrised with another item type is re-read as mods.
    if isinstance(response, PaginatedResponse) and not isinstance(
        response, PaginatedResponse[ModObject]
    ):
        return response.model_dump()
    return response


def _total(result_total: Optional[int], start: int, mods: list[ModObject]) -> int:
    if result_total is not None:
        return result_total
    return start + len(mods)


def _page_from_batch(
    batch: RawBatch,
    request: PageRequest,
    collection_url: str,
    cache: Optional[PageCache],
) -> ModPage:
    full_batch = ModBatch(
        total_search_results_found=batch.total,
        slots=tuple(mod_profile_from_wire(mod) for mod in batch.mods),
    )

    first = max(request.offset, batch.start) - batch.start
    last = min(request.offset + request.page_size, batch.start + len(full_batch.slots)) - batch.start
    page = full_batch.window(first, last - first)

    key = canonical_collection_key(collection_url)
    (cache if cache is not None else get_page_cache()).put(key, batch.start, full_batch)

    logger.debug(
        "Translated %d mods at offset %d for %s; returning %d for page %d (size %d)",
        len(full_batch.slots),
        batch.start,
        key,
        len(page.mod_profiles),
        request.page_index,
        request.page_size,
    )
    return page
