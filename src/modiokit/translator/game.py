"""Translation of game-level data: terms of use and tag categories."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from modiokit.models import Tag, TagCategory, TermsHash, TermsOfUse, TermsOfUseLink
from modiokit.translator.coerce import as_wire, as_wire_list
from modiokit.utils import terms_md5
from modiokit.wire import GameTagOptionObject, LinkObject, TermsLinksObject, TermsObject

MULTI_SELECT_TAG_TYPE = "checkboxes"
"""Wire ``type`` of a tag category whose tags can be combined."""


def _link_from_wire(link: Optional[LinkObject]) -> TermsOfUseLink:
    if link is None:
        return TermsOfUseLink()
    return TermsOfUseLink(
        name=link.text or "",
        url=link.url or "",
        required=bool(link.required),
    )


def terms_from_wire(terms: Union[TermsObject, dict[str, Any]]) -> TermsOfUse:
    """Translate the game's terms of use.

    The four links always come out in the order website, terms, privacy,
    manage. A link the service left out becomes an empty, optional link.
    The hash is the MD5 of the plaintext terms so that a later fetch can
    tell whether the user must accept the terms again.
    """
    wire = as_wire(TermsObject, terms)
    links = wire.links or TermsLinksObject()
    text = wire.plaintext or ""
    return TermsOfUse(
        terms_of_use=text,
        links=(
            _link_from_wire(links.website),
            _link_from_wire(links.terms),
            _link_from_wire(links.privacy),
            _link_from_wire(links.manage),
        ),
        hash=TermsHash(md5hash=terms_md5(text)),
    )


def tag_categories_from_wire(
    tag_options: Optional[Iterable[Union[GameTagOptionObject, dict[str, Any]]]],
) -> list[TagCategory]:
    """Translate the game's tag options into tag categories.

    Usage counts come from each category's ``tag_count_map``; a tag missing
    from the map has been used zero times.
    """
    categories = []
    for wire in as_wire_list(GameTagOptionObject, tag_options):
        counts = wire.tag_count_map or {}
        tags = tuple(
            Tag(name=name or "", total_uses=counts.get(name, 0) if name else 0)
            for name in wire.tags or []
        )
        categories.append(
            TagCategory(
                name=wire.name or "",
                tags=tags,
                multi_select=wire.type == MULTI_SELECT_TAG_TYPE,
                hidden=bool(wire.hidden),
                locked=bool(wire.locked),
            )
        )
    return categories
