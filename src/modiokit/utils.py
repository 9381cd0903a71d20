"""Time and hashing helpers shared by the translator.

The service reports every timestamp as a signed count of seconds since the
Unix epoch. :class:`UtcInstant` keeps that count as-is so that any signed
64-bit value survives a round trip, and only turns it into a
:class:`~datetime.datetime` on request. ``datetime`` cannot represent years
outside 1..9999, so :meth:`UtcInstant.as_datetime` raises
:class:`OverflowError` for instants beyond that range instead of clamping.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
"""Origin of the service's timestamps (1970-01-01T00:00:00Z)."""


class UtcInstant(BaseModel):
    """A UTC instant expressed as whole seconds from :data:`UNIX_EPOCH`.

    Example::

        instant = utc_from_epoch_seconds(1_700_000_000)
        instant.as_datetime()   # datetime(2023, 11, 14, 22, 13, 20, tzinfo=utc)
        instant.seconds         # 1700000000
    """

    model_config = ConfigDict(frozen=True)

    seconds: int

    def as_datetime(self) -> datetime:
        """Return the instant as a timezone-aware UTC datetime.

        Raises:
            OverflowError: If the instant lies outside the years 1..9999.
        """
        return UNIX_EPOCH + timedelta(seconds=self.seconds)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def iso(self) -> Optional[str]:
        """ISO 8601 text of the instant, or ``None`` when it cannot be represented."""
        try:
            return self.as_datetime().isoformat()
        except OverflowError:
            return None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UtcInstant):
            return NotImplemented
        return self.seconds < other.seconds


def utc_from_epoch_seconds(seconds: int) -> UtcInstant:
    """Convert a server timestamp into a :class:`UtcInstant`.

    Args:
        seconds: Signed seconds since the Unix epoch.

    Returns:
        The instant ``UNIX_EPOCH + seconds``.
    """
    return UtcInstant(seconds=int(seconds))


def epoch_seconds(instant: UtcInstant) -> int:
    """Inverse of :func:`utc_from_epoch_seconds`."""
    return instant.seconds


def terms_md5(text: str) -> str:
    """Hex MD5 digest of *text*, used to detect changed terms of use."""
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()
