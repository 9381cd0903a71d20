"""modiokit -- translation and page caching for a mod.io client.

This package sits between the HTTP layer of a mod.io client and the
application. It turns the service's large, nullable JSON objects into
small, frozen domain models, and keeps every converted batch of mods in an
in-memory page cache so that paging through a listing in small steps does
not refetch data the service already sent.

Typical use::

    from modiokit.cache import canonical_collection_key, get_page_cache
    from modiokit.config import resolve_config
    from modiokit.models import PageRequest
    from modiokit.translator import mod_page_from_listing

    config = resolve_config()
    request = PageRequest(page_size=10, page_index=3)
    key = canonical_collection_key(url)
    page = get_page_cache().get_window(key, request)
    if page is None:
        params = request.batch_params(config.cache.min_batch_size)
        response = fetch(url, params=params)  # your HTTP layer
        page = mod_page_from_listing(response, request, url)

Modules:
    models: Frozen domain models, enums, ``ModId`` and config models.
    wire: Pydantic models of the service's JSON.
    translator: Wire-to-domain conversion and page slicing.
    cache: The thread-safe in-memory page cache.
    utils: UTC timestamp conversion and terms hashing.
    config: XDG-aware configuration with environment overrides.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI for translating captured responses.
"""

__version__ = "0.1.0"
