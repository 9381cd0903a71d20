"""Canonical Pydantic models shared across all modiokit modules.

This is the single source of truth for the shapes handed to application
code. Wire shapes (the service's JSON) live in :mod:`modiokit.wire`; the
translator turns those into the models defined here. The models fall into
three groups:

**Identity and enums** -- :class:`ModId`, :class:`ModStatus`,
:class:`ContentWarnings`, :class:`ModRating`.

**Domain models** -- frozen value objects with no reference back to the
wire payload they came from or to the page cache:
    :class:`DownloadReference`, :class:`UserProfile`, :class:`ModStats`,
    :class:`ModProfile`, :class:`ModPage`, :class:`ModBatch`,
    :class:`TermsOfUseLink`,
    :class:`TermsHash`, :class:`TermsOfUse`, :class:`Tag`,
    :class:`TagCategory`, :class:`Rating`, :class:`ModDependencies`,
    :class:`PageRequest`.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`ServerConfig`, :class:`PageCacheConfig`,
:class:`GlobalConfig`.

Every sequence on a domain model is a tuple, so a model pulled out of the
page cache cannot be mutated by the caller.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import core_schema

from modiokit.utils import UtcInstant, utc_from_epoch_seconds


# --- Identity ---


class ModId:
    """Identity of a mod on the service.

    Wraps the raw integer so that mod ids live in their own namespace: a
    ``ModId`` compares equal only to another ``ModId``, never to a bare
    ``int``. Use ``int(mod_id)`` when the raw value is needed (query
    strings, logging).

    ``ModId.NONE`` (value 0) is the "no mod" sentinel bound to download
    references that have no owning mod, such as user avatars.

    Example::

        ModId(42) == ModId(42)   # True
        ModId(42) == 42          # False
        int(ModId(42))           # 42
    """

    __slots__ = ("_value",)

    NONE: ClassVar[ModId]

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"ModId requires an int, got {type(value).__name__}")
        self._value = value

    @property
    def is_valid(self) -> bool:
        """``True`` unless this is the zero "no mod" sentinel."""
        return self._value != 0

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModId):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModId):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash((ModId, self._value))

    def __repr__(self) -> str:
        return f"ModId({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )

    @classmethod
    def _validate(cls, value: Any) -> ModId:
        if isinstance(value, cls):
            return value
        raise ValueError(f"expected ModId, got {type(value).__name__}")


ModId.NONE = ModId(0)


# --- Enums ---


class ModStatus(int, enum.Enum):
    """Moderation status of a mod as reported by the service."""

    NOT_ACCEPTED = 0
    ACCEPTED = 1
    DELETED = 3


class ContentWarnings(enum.IntFlag):
    """Mature-content flags (the wire ``maturity_option`` bitfield)."""

    NONE = 0
    ALCOHOL = 1
    DRUGS = 2
    VIOLENCE = 4
    EXPLICIT = 8


class ModRating(int, enum.Enum):
    """A user's rating of a mod."""

    NEGATIVE = -1
    NONE = 0
    POSITIVE = 1


# --- Domain models ---

_FROZEN = ConfigDict(frozen=True)
_EPOCH = utc_from_epoch_seconds(0)


class DownloadReference(BaseModel):
    """A fetchable asset: file name, resolved URL and owning mod.

    Built by :func:`~modiokit.translator.create_download_reference` from
    the URL fragments of a wire object; never deserialised directly.
    """

    model_config = _FROZEN

    filename: str = ""
    url: str = ""
    mod_id: ModId = ModId.NONE


class UserProfile(BaseModel):
    """A user of the service, typically the creator of a mod."""

    model_config = _FROZEN

    user_id: int = 0
    username: str = ""
    portal_username: str = ""
    language: str = ""
    timezone: str = ""
    avatar_original: DownloadReference = Field(default_factory=DownloadReference)
    avatar_50x50: DownloadReference = Field(default_factory=DownloadReference)
    avatar_100x100: DownloadReference = Field(default_factory=DownloadReference)


class ModStats(BaseModel):
    """Aggregated download, rating and popularity figures for a mod."""

    model_config = _FROZEN

    mod_id: ModId = ModId.NONE
    downloads_today: int = 0
    downloads_total: int = 0
    ratings_total: int = 0
    ratings_positive: int = 0
    ratings_negative: int = 0
    ratings_percentage_positive: int = 0
    ratings_weighted_aggregate: float = 0.0
    ratings_display_text: str = ""
    popularity_rank_position: int = 0
    popularity_rank_total_mods: int = 0
    subscriber_total: int = 0


class ModProfile(BaseModel):
    """Everything application code needs to show a mod.

    ``archive_file_size`` is ``None`` when the mod has no uploaded archive;
    a zero-byte archive reports ``0``. ``metadata_kvps`` keeps the wire
    order and may contain the same key more than once.

    Gallery image tuples are parallel: index *i* of each tuple refers to
    the same gallery image at a different resolution.
    """

    model_config = _FROZEN

    id: ModId
    name: str = ""
    summary: str = ""
    description: str = ""
    homepage_url: str = ""
    status: ModStatus = ModStatus.NOT_ACCEPTED
    visible: bool = False
    content_warnings: ContentWarnings = ContentWarnings.NONE
    creator: UserProfile = Field(default_factory=UserProfile)
    metadata: str = ""
    metadata_kvps: tuple[tuple[str, str], ...] = ()
    tags: tuple[str, ...] = ()

    archive_file_size: Optional[int] = None
    latest_version: str = ""
    latest_changelog: str = ""
    latest_date_file_added: UtcInstant = _EPOCH

    date_live: UtcInstant = _EPOCH
    date_added: UtcInstant = _EPOCH
    date_updated: UtcInstant = _EPOCH

    logo_image_320x180: DownloadReference = Field(default_factory=DownloadReference)
    logo_image_640x360: DownloadReference = Field(default_factory=DownloadReference)
    logo_image_1280x720: DownloadReference = Field(default_factory=DownloadReference)
    logo_image_original: DownloadReference = Field(default_factory=DownloadReference)

    creator_avatar_50x50: DownloadReference = Field(default_factory=DownloadReference)
    creator_avatar_100x100: DownloadReference = Field(default_factory=DownloadReference)
    creator_avatar_original: DownloadReference = Field(default_factory=DownloadReference)

    gallery_images_320x180: tuple[DownloadReference, ...] = ()
    gallery_images_640x360: tuple[DownloadReference, ...] = ()
    gallery_images_original: tuple[DownloadReference, ...] = ()

    stats: ModStats = Field(default_factory=ModStats)

    @property
    def has_archive(self) -> bool:
        """Whether an archive file is attached to the mod."""
        return self.archive_file_size is not None


class ModPage(BaseModel):
    """A window over a search result: the total hit count plus some profiles."""

    model_config = _FROZEN

    total_search_results_found: int = 0
    mod_profiles: tuple[ModProfile, ...] = ()


class ModBatch(BaseModel):
    """A whole converted fetch result, as stored in the page cache.

    ``slots`` holds one entry per wire record in wire order, with ``None``
    where the record had no valid identity. Slot *i* is therefore always
    the record at logical index ``batch offset + i``, and windows are cut
    by position before invalid records are skipped.

    Example::

        batch = ModBatch(total_search_results_found=3, slots=(a, None, c))
        batch.mod_profiles      # (a, c)
        batch.window(1, 2)      # ModPage(total_search_results_found=3, mod_profiles=(c,))
    """

    model_config = _FROZEN

    total_search_results_found: int = 0
    slots: tuple[Optional[ModProfile], ...] = ()

    @property
    def mod_profiles(self) -> tuple[ModProfile, ...]:
        """The valid profiles of the batch."""
        return tuple(p for p in self.slots if p is not None)

    def window(self, start: int, size: int) -> ModPage:
        """Return the valid profiles at positions ``[start, start + size)``."""
        start = max(start, 0)
        return ModPage(
            total_search_results_found=self.total_search_results_found,
            mod_profiles=tuple(
                p for p in self.slots[start : start + max(size, 0)] if p is not None
            ),
        )


class TermsOfUseLink(BaseModel):
    """One of the four links shown alongside the terms of use."""

    model_config = _FROZEN

    name: str = ""
    url: str = ""
    required: bool = False


class TermsHash(BaseModel):
    """Digest of the terms text, compared to detect changed terms."""

    model_config = _FROZEN

    md5hash: str = ""


class TermsOfUse(BaseModel):
    """Terms text, the website/terms/privacy/manage links (in that order) and its hash."""

    model_config = _FROZEN

    terms_of_use: str = ""
    links: tuple[TermsOfUseLink, TermsOfUseLink, TermsOfUseLink, TermsOfUseLink]
    hash: TermsHash = Field(default_factory=TermsHash)

    @property
    def website(self) -> TermsOfUseLink:
        return self.links[0]

    @property
    def terms(self) -> TermsOfUseLink:
        return self.links[1]

    @property
    def privacy(self) -> TermsOfUseLink:
        return self.links[2]

    @property
    def manage(self) -> TermsOfUseLink:
        return self.links[3]


class Tag(BaseModel):
    """A tag name and how many mods use it."""

    model_config = _FROZEN

    name: str = ""
    total_uses: int = 0


class TagCategory(BaseModel):
    """A named group of tags a mod can be filed under."""

    model_config = _FROZEN

    name: str = ""
    tags: tuple[Tag, ...] = ()
    multi_select: bool = False
    hidden: bool = False
    locked: bool = False


class Rating(BaseModel):
    """The current user's rating of one mod."""

    model_config = _FROZEN

    mod_id: ModId
    rating: ModRating = ModRating.NONE
    date_added: UtcInstant = _EPOCH


class ModDependencies(BaseModel):
    """One dependency of a mod."""

    model_config = _FROZEN

    mod_id: ModId
    mod_name: str = ""
    date_added: UtcInstant = _EPOCH


class PageRequest(BaseModel):
    """The page a caller asked for: ``page_size`` records at ``page_index``.

    The service always answers with a larger batch (at least
    :attr:`PageCacheConfig.min_batch_size` records), so a page request is
    turned into batch parameters with :meth:`batch_params` and the page is
    cut out of the batch afterwards.

    Example::

        request = PageRequest(page_size=10, page_index=3)
        request.offset                 # 30
        request.batch_params(100)      # {"_offset": 30, "_limit": 100}
    """

    model_config = _FROZEN

    page_size: int = Field(gt=0, description="Records per page")
    page_index: int = Field(default=0, ge=0, description="Zero-based page number")

    @property
    def offset(self) -> int:
        """Logical index of the first record of the page."""
        return self.page_size * self.page_index

    def batch_params(self, min_batch_size: int) -> dict[str, int]:
        """Query parameters for a fetch that covers this page.

        Args:
            min_batch_size: Smallest batch the service returns.

        Returns:
            ``{"_offset": offset, "_limit": max(page_size, min_batch_size)}``.
        """
        return {
            "_offset": self.offset,
            "_limit": max(self.page_size, min_batch_size),
        }


# --- Config ---


class ServerConfig(BaseModel):
    """Where the service lives and which game's mods are browsed."""

    server_url: str = Field(
        default="https://api.mod.io/v1", description="Base URL of the REST API"
    )
    game_id: int = Field(default=0, ge=0, description="Game whose mods are listed")


class PageCacheConfig(BaseModel):
    """In-memory page cache settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Enable the page cache")
    min_batch_size: int = Field(
        default=100, gt=0, description="Smallest batch the service returns per fetch"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/modiokit/config.json``.

    Loaded and saved by :func:`~modiokit.config.load_global_config` and
    :func:`~modiokit.config.save_global_config`. Environment variables and
    CLI flags override it; see :func:`~modiokit.config.resolve_config`.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    cache: PageCacheConfig = Field(default_factory=PageCacheConfig)
