"""Shared test fixtures for modiokit.

Provides wire-object factories shaped like real mod.io responses, an
isolated config environment, and autouse resets of the process-wide page
cache and output manager so tests never leak state into each other.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Callable

import pytest
from rich.logging import RichHandler

from modiokit.cache import PageCache, reset_page_cache
from modiokit.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals() -> None:
    """Reset the process-wide page cache and OutputManager after every test.

    The CLI callback attaches a RichHandler bound to the streams CliRunner
    swaps in; it is removed so later tests never log to a closed stream.
    """
    yield
    reset_page_cache()
    reset_output()
    logger = logging.getLogger("modiokit")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Wire object factories
# ---------------------------------------------------------------------------

_USER: dict[str, Any] = {
    "id": 1,
    "name_id": "xant",
    "username": "XanT",
    "display_name_portal": "XanT#1234",
    "date_online": 1509922961,
    "language": "en",
    "timezone": "Australia/Brisbane",
    "profile_url": "https://mod.io/u/xant",
    "avatar": {
        "filename": "avatar.png",
        "original": "https://thumb.modcdn.io/members/c4ca/1/avatar.png",
        "thumb_50x50": "https://thumb.modcdn.io/members/c4ca/1/crop_50x50/avatar.png",
        "thumb_100x100": "https://thumb.modcdn.io/members/c4ca/1/crop_100x100/avatar.png",
    },
}

_MOD: dict[str, Any] = {
    "id": 2,
    "game_id": 2,
    "status": 1,
    "visible": 1,
    "submitted_by": _USER,
    "date_added": 1492564103,
    "date_updated": 1499841487,
    "date_live": 1499841403,
    "maturity_option": 0,
    "logo": {
        "filename": "card.png",
        "original": "https://thumb.modcdn.io/mods/c81e/2/card.png",
        "thumb_320x180": "https://thumb.modcdn.io/mods/c81e/2/crop_320x180/card.png",
        "thumb_640x360": "https://thumb.modcdn.io/mods/c81e/2/crop_640x360/card.png",
        "thumb_1280x720": "https://thumb.modcdn.io/mods/c81e/2/crop_1280x720/card.png",
    },
    "homepage_url": "https://www.rogue-hdpack.com/",
    "name": "Rogue Knight HD Pack",
    "name_id": "rogue-knight-hd-pack",
    "summary": "It's time to bask in the glory of beautiful 4k textures!",
    "description": "<p>Rogue HD Pack does exactly what you thi...</p>",
    "description_plaintext": "Rogue HD Pack does exactly what you thi...",
    "metadata_blob": "rogue,hd,high-res,4k,hd textures",
    "profile_url": "https://rogue-knight.mod.io/rogue-knight-hd-pack",
    "media": {
        "youtube": ["https://www.youtube.com/watch?v=dQw4w9WgXcQ"],
        "sketchfab": [],
        "images": [
            {
                "filename": "shot1.png",
                "original": "https://image.modcdn.io/mods/c81e/2/images/shot1.png",
                "thumb_320x180": "https://thumb.modcdn.io/mods/c81e/2/images/crop_320x180/shot1.png",
            },
            {
                "filename": "shot2.png",
                "original": "https://image.modcdn.io/mods/c81e/2/images/shot2.png",
                "thumb_320x180": "https://thumb.modcdn.io/mods/c81e/2/images/crop_320x180/shot2.png",
            },
        ],
    },
    "modfile": {
        "id": 2,
        "mod_id": 2,
        "date_added": 1499841487,
        "filesize": 15181,
        "filename": "rogue-knight-v1.zip",
        "version": "1.3",
        "changelog": "VERSION 1.3 -- Changes -- Fixed critical castle floor bug.",
        "metadata_blob": "rogue,hd,high-res,4k,hd textures",
    },
    "stats": {
        "mod_id": 2,
        "popularity_rank_position": 13,
        "popularity_rank_total_mods": 204,
        "downloads_today": 327,
        "downloads_total": 27492,
        "subscribers_total": 16394,
        "ratings_total": 1230,
        "ratings_positive": 1047,
        "ratings_negative": 183,
        "ratings_percentage_positive": 91,
        "ratings_weighted_aggregate": 87.38,
        "ratings_display_text": "Very Positive",
        "date_expires": 1492564103,
    },
    "metadata_kvp": [
        {"metakey": "pistol-dmg", "metavalue": "800"},
        {"metakey": "smg-dmg", "metavalue": "1200"},
    ],
    "tags": [
        {"name": "Unity", "date_added": 1499841487},
        {"name": "Textures", "date_added": 1499841487},
    ],
}


@pytest.fixture
def user_wire() -> dict[str, Any]:
    """A complete user object."""
    return copy.deepcopy(_USER)


@pytest.fixture
def make_mod() -> Callable[..., dict[str, Any]]:
    """Factory for mod objects; keyword arguments override top-level fields."""

    def _make(**overrides: Any) -> dict[str, Any]:
        mod = copy.deepcopy(_MOD)
        mod.update(overrides)
        return mod

    return _make


@pytest.fixture
def make_batch(make_mod: Callable[..., dict[str, Any]]) -> Callable[..., list[dict[str, Any]]]:
    """Factory for a batch of mods with ids ``first_id .. first_id + count - 1``."""

    def _make(count: int = 100, first_id: int = 1) -> list[dict[str, Any]]:
        return [
            make_mod(id=mod_id, name=f"Mod {mod_id}")
            for mod_id in range(first_id, first_id + count)
        ]

    return _make


@pytest.fixture
def page_cache() -> PageCache:
    """A private, enabled PageCache."""
    return PageCache()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    forces the XDG code path, clears MODIOKIT_* environment variables and
    changes the working directory to tmp_path.
    """
    monkeypatch.setattr("modiokit.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["MODIOKIT_SERVER_URL", "MODIOKIT_GAME_ID"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
