"""Translation of mods, users, ratings and dependencies.

:func:`mod_profile_from_wire` is where the defaulting policy for a mod
lives: every optional string becomes ``""``, every absent timestamp becomes
the epoch, absent nested objects (logo, avatar, gallery, stats, metadata)
become empty references or empty tuples. The one thing that is never
defaulted is the mod's identity. A mod object with id 0 (or no id) is a
malformed record, so the translator logs it and returns ``None`` instead
of a profile full of zero values.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from modiokit.exceptions import RecordNotFoundError
from modiokit.models import (
    ContentWarnings,
    DownloadReference,
    ModDependencies,
    ModId,
    ModProfile,
    ModRating,
    ModStats,
    ModStatus,
    Rating,
    UserProfile,
)
from modiokit.translator.coerce import as_wire, as_wire_list, enum_or_default
from modiokit.utils import utc_from_epoch_seconds
from modiokit.wire import (
    AvatarObject,
    LogoObject,
    ModDependenciesObject,
    ModfileObject,
    ModObject,
    ModStatsObject,
    RatingObject,
    UserObject,
)

logger = logging.getLogger(__name__)

GALLERY_THUMB_TOKEN = "320x180"
GALLERY_MEDIUM_TOKEN = "640x360"

ModPayload = Union[ModObject, dict[str, Any]]


def create_download_reference(
    filename: Optional[str], url: Optional[str], mod_id: ModId
) -> DownloadReference:
    """Build a :class:`DownloadReference`; absent fragments become ``""``."""
    return DownloadReference(filename=filename or "", url=url or "", mod_id=mod_id)


def derive_640x360_url(thumb_320x180_url: str) -> str:
    """Derive a gallery image's 640x360 URL from its 320x180 URL.

    The service only sends the 320x180 thumbnail and the original for
    gallery images, but serves a 640x360 rendition at the same URL with the
    resolution token swapped. Every occurrence of ``"320x180"`` is replaced
    with ``"640x360"``. If the service ever renames the token this silently
    yields the 320x180 URL again.

    Example::

        derive_640x360_url("https://thumb.modcdn.io/mods/1/images/thumb_320x180/a.png")
        # -> "https://thumb.modcdn.io/mods/1/images/thumb_640x360/a.png"
    """
    return thumb_320x180_url.replace(GALLERY_THUMB_TOKEN, GALLERY_MEDIUM_TOKEN)


def user_profile_from_wire(user: Union[UserObject, dict[str, Any], None]) -> UserProfile:
    """Translate a user object.

    Avatar references carry :attr:`ModId.NONE` since a user belongs to no
    particular mod. An absent user yields an empty profile.
    """
    wire = as_wire(UserObject, user) if user is not None else UserObject()
    avatar = wire.avatar or AvatarObject()
    return UserProfile(
        user_id=wire.id or 0,
        username=wire.username or "",
        portal_username=wire.display_name_portal or "",
        language=wire.language or "",
        timezone=wire.timezone or "",
        avatar_original=create_download_reference(avatar.filename, avatar.original, ModId.NONE),
        avatar_50x50=create_download_reference(avatar.filename, avatar.thumb_50x50, ModId.NONE),
        avatar_100x100=create_download_reference(avatar.filename, avatar.thumb_100x100, ModId.NONE),
    )


def _stats_from_wire(stats: Optional[ModStatsObject], mod_id: ModId) -> ModStats:
    wire = stats or ModStatsObject()
    stats_id = ModId(wire.mod_id or 0)
    return ModStats(
        mod_id=stats_id if stats_id.is_valid else mod_id,
        downloads_today=wire.downloads_today or 0,
        downloads_total=wire.downloads_total or 0,
        ratings_total=wire.ratings_total or 0,
        ratings_positive=wire.ratings_positive or 0,
        ratings_negative=wire.ratings_negative or 0,
        ratings_percentage_positive=wire.ratings_percentage_positive or 0,
        ratings_weighted_aggregate=wire.ratings_weighted_aggregate or 0.0,
        ratings_display_text=wire.ratings_display_text or "",
        popularity_rank_position=wire.popularity_rank_position or 0,
        popularity_rank_total_mods=wire.popularity_rank_total_mods or 0,
        subscriber_total=wire.subscribers_total or 0,
    )


def mod_profile_from_wire(mod: ModPayload) -> Optional[ModProfile]:
    """Translate a mod object into a :class:`ModProfile`.

    Args:
        mod: A :class:`~modiokit.wire.ModObject` or its JSON dict.

    Returns:
        The profile, or ``None`` when the object's id is 0 or missing.
        Callers must treat ``None`` as "no such mod".

    Raises:
        WireFormatError: If *mod* does not fit the mod object shape.
    """
    wire = as_wire(ModObject, mod)
    mod_id = ModId(wire.id or 0)
    if not mod_id.is_valid:
        logger.error(
            "Mod object with id %r is not a valid record; no profile produced", wire.id
        )
        return None

    creator = wire.submitted_by or UserObject()
    avatar = creator.avatar or AvatarObject()
    logo = wire.logo or LogoObject()
    modfile = wire.modfile or ModfileObject()
    images = (wire.media.images if wire.media is not None else None) or []

    return ModProfile(
        id=mod_id,
        name=wire.name or "",
        summary=wire.summary or "",
        description=wire.description_plaintext or "",
        homepage_url=wire.homepage_url or "",
        status=enum_or_default(ModStatus, wire.status, ModStatus.NOT_ACCEPTED),
        visible=wire.visible == 1,
        content_warnings=enum_or_default(
            ContentWarnings, wire.maturity_option, ContentWarnings.NONE
        ),
        creator=user_profile_from_wire(creator),
        metadata=wire.metadata_blob or "",
        metadata_kvps=tuple(
            (kvp.metakey or "", kvp.metavalue or "") for kvp in wire.metadata_kvp or []
        ),
        tags=tuple(tag.name or "" for tag in wire.tags or []),
        # modfile id 0 means "no archive uploaded", which is not a 0-byte archive
        archive_file_size=(modfile.filesize or 0) if modfile.id else None,
        latest_version=modfile.version or "",
        latest_changelog=modfile.changelog or "",
        latest_date_file_added=utc_from_epoch_seconds(modfile.date_added or 0),
        date_live=utc_from_epoch_seconds(wire.date_live or 0),
        date_added=utc_from_epoch_seconds(wire.date_added or 0),
        date_updated=utc_from_epoch_seconds(wire.date_updated or 0),
        logo_image_320x180=create_download_reference(logo.filename, logo.thumb_320x180, mod_id),
        logo_image_640x360=create_download_reference(logo.filename, logo.thumb_640x360, mod_id),
        logo_image_1280x720=create_download_reference(logo.filename, logo.thumb_1280x720, mod_id),
        logo_image_original=create_download_reference(logo.filename, logo.original, mod_id),
        creator_avatar_50x50=create_download_reference(avatar.filename, avatar.thumb_50x50, mod_id),
        creator_avatar_100x100=create_download_reference(avatar.filename, avatar.thumb_100x100, mod_id),
        creator_avatar_original=create_download_reference(avatar.filename, avatar.original, mod_id),
        gallery_images_320x180=tuple(
            create_download_reference(image.filename, image.thumb_320x180, mod_id)
            for image in images
        ),
        gallery_images_640x360=tuple(
            create_download_reference(
                image.filename, derive_640x360_url(image.thumb_320x180 or ""), mod_id
            )
            for image in images
        ),
        gallery_images_original=tuple(
            create_download_reference(image.filename, image.original, mod_id)
            for image in images
        ),
        stats=_stats_from_wire(wire.stats, mod_id),
    )


def mod_profiles_from_wire(mods: Optional[Iterable[ModPayload]]) -> list[ModProfile]:
    """Translate a list of mod objects, leaving out invalid records."""
    profiles = []
    for mod in as_wire_list(ModObject, mods):
        profile = mod_profile_from_wire(mod)
        if profile is not None:
            profiles.append(profile)
    return profiles


def require_mod_profile(mod: ModPayload) -> ModProfile:
    """Like :func:`mod_profile_from_wire` but raise instead of returning ``None``.

    Raises:
        RecordNotFoundError: If the mod object has no valid id.
        WireFormatError: If *mod* does not fit the mod object shape.
    """
    profile = mod_profile_from_wire(mod)
    if profile is None:
        raise RecordNotFoundError("Mod object has no valid id; no such mod")
    return profile


def ratings_from_wire(
    ratings: Optional[Iterable[Union[RatingObject, dict[str, Any]]]],
) -> list[Rating]:
    """Translate rating objects one-to-one."""
    return [
        Rating(
            mod_id=ModId(wire.mod_id or 0),
            rating=enum_or_default(ModRating, wire.rating, ModRating.NONE),
            date_added=utc_from_epoch_seconds(wire.date_added or 0),
        )
        for wire in as_wire_list(RatingObject, ratings)
    ]


def mod_dependencies_from_wire(
    dependencies: Optional[Iterable[Union[ModDependenciesObject, dict[str, Any]]]],
) -> list[ModDependencies]:
    """Translate dependency objects one-to-one."""
    return [
        ModDependencies(
            mod_id=ModId(wire.mod_id or 0),
            mod_name=wire.mod_name or "",
            date_added=utc_from_epoch_seconds(wire.date_added or 0),
        )
        for wire in as_wire_list(ModDependenciesObject, dependencies)
    ]
