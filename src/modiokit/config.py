"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the persistent configuration of modiokit:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.modiokit/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~modiokit.models.GlobalConfig`
  JSON file storing the server location and page-cache settings.
* **Precedence resolution** -- :func:`resolve_config` layers CLI flags and
  environment variables over the config file.

The translator and page cache never read configuration themselves; the
caller passes URLs and cache instances in. Configuration is consumed by
the CLI and by applications that want the same defaults.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from modiokit.exceptions import ConfigError
from modiokit.models import GlobalConfig, ServerConfig

_APP_NAME = "modiokit"
_CONFIG_FILENAME = "config.json"

ENV_SERVER_URL = "MODIOKIT_SERVER_URL"
ENV_GAME_ID = "MODIOKIT_GAME_ID"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/modiokit/`` (default ``~/.config/modiokit/``).
    On macOS/Windows: ``~/.modiokit/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/modiokit/`` (default ``~/.local/share/modiokit/``).
    On macOS/Windows: ``~/.modiokit/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~modiokit.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    cli_server_url: Optional[str] = None,
    cli_game_id: Optional[int] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_server_url``, ``cli_game_id``)
        2. Environment variables (``MODIOKIT_SERVER_URL``, ``MODIOKIT_GAME_ID``)
        3. User config (``~/.config/modiokit/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file is invalid or ``MODIOKIT_GAME_ID``
            is not a non-negative integer.
    """
    config = load_global_config()
    server = config.server

    env_url = os.environ.get(ENV_SERVER_URL)
    if env_url:
        server.server_url = env_url
    env_game = os.environ.get(ENV_GAME_ID)
    if env_game:
        try:
            server.game_id = int(env_game)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_GAME_ID} must be an integer, got {env_game!r}"
            ) from exc

    if cli_server_url is not None:
        server.server_url = cli_server_url
    if cli_game_id is not None:
        server.game_id = cli_game_id

    if server.game_id < 0:
        raise ConfigError(f"Game id must be >= 0, got {server.game_id}")
    return config


def mods_url(server: ServerConfig) -> str:
    """Un-paginated URL of the configured game's mod listing.

    Example::

        mods_url(ServerConfig(server_url="https://api.mod.io/v1", game_id=5))
        # -> "https://api.mod.io/v1/games/5/mods"
    """
    return f"{server.server_url.rstrip('/')}/games/{server.game_id}/mods"
