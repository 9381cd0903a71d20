"""Translate commands -- turn captured wire JSON into domain objects.

Provides ``modiokit translate`` and ``modiokit page``. Both read a JSON
document captured from the service (a file path, or ``-`` for stdin), run
it through the translator, and print the resulting domain object. They are
debugging aids for the translation layer: no network access is involved.
"""

from __future__ import annotations

import enum
import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from modiokit.cache import PageCache
from modiokit.exceptions import InvalidUsageError, ModioKitError, WireFormatError
from modiokit.models import PageCacheConfig, PageRequest
from modiokit.output import debug, error, format_response


class WireKind(str, enum.Enum):
    """Entity types ``modiokit translate`` understands."""

    MOD = "mod"
    USER = "user"
    TERMS = "terms"
    TAGS = "tags"
    RATINGS = "ratings"
    DEPENDENCIES = "dependencies"


class PageShape(str, enum.Enum):
    """Envelope a captured mod list arrived in."""

    LISTING = "listing"
    PAGINATED = "paginated"


def _read_json(source: str) -> Any:
    """Load JSON from a file path, or from stdin when *source* is ``-``."""
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source).expanduser()
        if not path.is_file():
            raise InvalidUsageError(f"File not found: {path}")
        text = path.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise WireFormatError(f"{source} is not valid JSON: {exc}") from exc


def _items(payload: Any) -> Any:
    """Accept either a bare list or a paginated envelope around it."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _translate(kind: WireKind, payload: Any) -> Any:
    from modiokit.translator import (
        mod_dependencies_from_wire,
        ratings_from_wire,
        require_mod_profile,
        tag_categories_from_wire,
        terms_from_wire,
        user_profile_from_wire,
    )

    if kind == WireKind.MOD:
        return require_mod_profile(payload).model_dump(mode="json")
    if kind == WireKind.USER:
        return user_profile_from_wire(payload).model_dump(mode="json")
    if kind == WireKind.TERMS:
        return terms_from_wire(payload).model_dump(mode="json")

    items = _items(payload)
    if not isinstance(items, list):
        raise WireFormatError(f"Expected a list of {kind.value}, got {type(items).__name__}")
    if kind == WireKind.TAGS:
        results = tag_categories_from_wire(items)
    elif kind == WireKind.RATINGS:
        results = ratings_from_wire(items)
    else:
        results = mod_dependencies_from_wire(items)
    return [result.model_dump(mode="json") for result in results]


def translate_command(
    kind: WireKind = typer.Argument(..., help="Kind of wire object in the file."),
    source: str = typer.Argument(..., help="JSON file to read, or '-' for stdin."),
) -> None:
    """Translate one captured wire object and print the domain object.

    Exits with code 4 when a mod capture has no valid id.

    Example::

        modiokit translate mod mod-2231.json
        curl -s "$URL/games/1/tags" | modiokit translate tags -
    """
    try:
        payload = _read_json(source)
        format_response(_translate(kind, payload))
    except ModioKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def page_command(
    source: str = typer.Argument(..., help="JSON file to read, or '-' for stdin."),
    page_size: int = typer.Option(..., "--page-size", "-s", min=1, help="Records per page."),
    page_index: int = typer.Option(0, "--page-index", "-i", min=0, help="Zero-based page number."),
    shape: PageShape = typer.Option(
        PageShape.LISTING, "--shape", help="Envelope the capture arrived in."
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Request URL of the capture (defaults to the configured mod listing)."
    ),
) -> None:
    """Cut one page out of a captured mod list.

    Shows exactly what a caller asking for ``--page-size`` records at
    ``--page-index`` would receive, the fetch parameters that page implies
    (at least the configured ``min_batch_size`` records), and how much of
    the batch was cached. With ``--url`` the config file is not read and
    the default cache settings apply.

    Example::

        modiokit page mods.json --page-size 10 --page-index 3 --shape paginated
    """
    from modiokit.cache import canonical_collection_key
    from modiokit.config import mods_url, resolve_config
    from modiokit.translator import mod_page_from_listing, mod_page_from_paginated

    try:
        if url is None:
            config = resolve_config()
            collection_url = mods_url(config.server)
            cache_config = config.cache
        else:
            collection_url = url
            cache_config = PageCacheConfig()
        payload = _read_json(source)
        request = PageRequest(page_size=page_size, page_index=page_index)
        cache = PageCache(cache_config)
        debug(f"Fetch parameters: {request.batch_params(cache_config.min_batch_size)}")

        if shape == PageShape.LISTING:
            page = mod_page_from_listing(payload, request, collection_url, cache=cache)
        else:
            page = mod_page_from_paginated(payload, request, collection_url, cache=cache)

        debug(f"Collection key: {canonical_collection_key(collection_url)}")
        debug(f"Cache: {cache.stats()}")
        format_response(page.model_dump(mode="json"))
    except ModioKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
