"""Wire-to-domain translation for modiokit.

One ``*_from_wire`` function per entity turns a wire object (a model from
:mod:`modiokit.wire` or the equivalent JSON dict) into its frozen domain
model from :mod:`modiokit.models`. Each function owns the defaulting
policy for its entity, so what an absent field turns into can be read in
one place.

Modules:
    mods: Mods, users, ratings, dependencies and download references.
    game: Terms of use and tag categories.
    pages: Mod listings, page slicing and page-cache population.
    coerce: Payload validation and enum helpers.

Example::

    from modiokit.models import PageRequest
    from modiokit.translator import mod_page_from_listing

    page = mod_page_from_listing(
        response_json,
        PageRequest(page_size=10, page_index=0),
        "https://api.mod.io/v1/games/1/mods",
    )
"""

from modiokit.translator.game import tag_categories_from_wire, terms_from_wire
from modiokit.translator.mods import (
    create_download_reference,
    derive_640x360_url,
    mod_dependencies_from_wire,
    mod_profile_from_wire,
    mod_profiles_from_wire,
    ratings_from_wire,
    require_mod_profile,
    user_profile_from_wire,
)
from modiokit.translator.pages import mod_page_from_listing, mod_page_from_paginated

__all__ = [
    "create_download_reference",
    "derive_640x360_url",
    "mod_dependencies_from_wire",
    "mod_page_from_listing",
    "mod_page_from_paginated",
    "mod_profile_from_wire",
    "mod_profiles_from_wire",
    "ratings_from_wire",
    "require_mod_profile",
    "tag_categories_from_wire",
    "terms_from_wire",
    "user_profile_from_wire",
]
