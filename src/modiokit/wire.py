"""Pydantic models mirroring the service's JSON responses.

These are the *wire* shapes: they follow the field names of the REST API
exactly and make every field optional, because the service omits or nulls
fields freely. No defaulting policy lives here; the translator in
:mod:`modiokit.translator` decides what an absent value becomes. Unknown
fields are ignored so that additions to the API do not break parsing.

Two envelopes carry lists of mods:

* :class:`GetModsResponse` -- the dedicated mod listing. Its ``data``
  starts at the offset the caller fetched.
* :class:`PaginatedResponse` -- the general paginated envelope used by
  other list endpoints. Its ``data`` starts at ``result_offset``.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for every wire object: tolerant of unknown fields."""

    model_config = ConfigDict(extra="ignore")


# --- Terms ---


class LinkObject(WireModel):
    text: Optional[str] = None
    url: Optional[str] = None
    required: Optional[bool] = None


class TermsLinksObject(WireModel):
    website: Optional[LinkObject] = None
    terms: Optional[LinkObject] = None
    privacy: Optional[LinkObject] = None
    manage: Optional[LinkObject] = None


class TermsObject(WireModel):
    plaintext: Optional[str] = None
    html: Optional[str] = None
    links: Optional[TermsLinksObject] = None


# --- Tags ---


class GameTagOptionObject(WireModel):
    name: Optional[str] = None
    type: Optional[str] = None
    tags: Optional[list[Optional[str]]] = None
    tag_count_map: Optional[dict[str, int]] = None
    hidden: Optional[bool] = None
    locked: Optional[bool] = None


# --- Users ---


class AvatarObject(WireModel):
    filename: Optional[str] = None
    original: Optional[str] = None
    thumb_50x50: Optional[str] = None
    thumb_100x100: Optional[str] = None


class UserObject(WireModel):
    id: Optional[int] = None
    name_id: Optional[str] = None
    username: Optional[str] = None
    display_name_portal: Optional[str] = None
    date_online: Optional[int] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    profile_url: Optional[str] = None
    avatar: Optional[AvatarObject] = None


# --- Mods ---


class LogoObject(WireModel):
    filename: Optional[str] = None
    original: Optional[str] = None
    thumb_320x180: Optional[str] = None
    thumb_640x360: Optional[str] = None
    thumb_1280x720: Optional[str] = None


class ImageObject(WireModel):
    filename: Optional[str] = None
    original: Optional[str] = None
    thumb_320x180: Optional[str] = None


class MediaObject(WireModel):
    youtube: Optional[list[str]] = None
    sketchfab: Optional[list[str]] = None
    images: Optional[list[ImageObject]] = None


class ModfileObject(WireModel):
    id: Optional[int] = None
    mod_id: Optional[int] = None
    date_added: Optional[int] = None
    filesize: Optional[int] = None
    filename: Optional[str] = None
    version: Optional[str] = None
    changelog: Optional[str] = None
    metadata_blob: Optional[str] = None


class ModTagObject(WireModel):
    name: Optional[str] = None
    date_added: Optional[int] = None


class MetadataKvpObject(WireModel):
    metakey: Optional[str] = None
    metavalue: Optional[str] = None


class ModStatsObject(WireModel):
    mod_id: Optional[int] = None
    popularity_rank_position: Optional[int] = None
    popularity_rank_total_mods: Optional[int] = None
    downloads_today: Optional[int] = None
    downloads_total: Optional[int] = None
    subscribers_total: Optional[int] = None
    ratings_total: Optional[int] = None
    ratings_positive: Optional[int] = None
    ratings_negative: Optional[int] = None
    ratings_percentage_positive: Optional[int] = None
    ratings_weighted_aggregate: Optional[float] = None
    ratings_display_text: Optional[str] = None
    date_expires: Optional[int] = None


class ModObject(WireModel):
    id: Optional[int] = None
    game_id: Optional[int] = None
    status: Optional[int] = None
    visible: Optional[int] = None
    submitted_by: Optional[UserObject] = None
    date_added: Optional[int] = None
    date_updated: Optional[int] = None
    date_live: Optional[int] = None
    maturity_option: Optional[int] = None
    logo: Optional[LogoObject] = None
    homepage_url: Optional[str] = None
    name: Optional[str] = None
    name_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    description_plaintext: Optional[str] = None
    metadata_blob: Optional[str] = None
    profile_url: Optional[str] = None
    media: Optional[MediaObject] = None
    modfile: Optional[ModfileObject] = None
    stats: Optional[ModStatsObject] = None
    metadata_kvp: Optional[list[MetadataKvpObject]] = None
    tags: Optional[list[ModTagObject]] = None


# --- Ratings / dependencies ---


class RatingObject(WireModel):
    game_id: Optional[int] = None
    mod_id: Optional[int] = None
    rating: Optional[int] = None
    date_added: Optional[int] = None


class ModDependenciesObject(WireModel):
    mod_id: Optional[int] = None
    mod_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("mod_name", "name")
    )
    date_added: Optional[int] = None


# --- Envelopes ---


class PaginatedResponse(WireModel, Generic[T]):
    """The general paginated envelope (``data`` plus ``result_*`` counters)."""

    data: Optional[list[T]] = None
    result_count: Optional[int] = None
    result_offset: Optional[int] = None
    result_limit: Optional[int] = None
    result_total: Optional[int] = None


class GetModsResponse(WireModel):
    """The dedicated mod listing envelope."""

    data: Optional[list[ModObject]] = None
    result_count: Optional[int] = None
    result_offset: Optional[int] = None
    result_limit: Optional[int] = None
    result_total: Optional[int] = None
