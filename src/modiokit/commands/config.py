"""Config commands -- view and update the global configuration.

Provides the ``modiokit config`` sub-command group: ``show`` prints the
effective configuration after environment overrides, ``set-server``
updates the stored server location.
"""

from __future__ import annotations

from typing import Optional

import typer

from modiokit.exceptions import ModioKitError
from modiokit.output import error, format_response, info

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        MODIOKIT_GAME_ID=5 modiokit config show
    """
    from modiokit.config import mods_url, resolve_config

    try:
        config = resolve_config()
    except ModioKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    data = config.model_dump(mode="json")
    data["mods_url"] = mods_url(config.server)
    format_response(data)


@config_app.command("set-server")
def config_set_server(
    server_url: Optional[str] = typer.Option(None, "--url", help="Base URL of the REST API."),
    game_id: Optional[int] = typer.Option(None, "--game-id", min=0, help="Game whose mods are listed."),
) -> None:
    """Store the server URL and/or game id in the global config file."""
    from modiokit.config import load_global_config, save_global_config

    try:
        config = load_global_config()
    except ModioKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if server_url is not None:
        config.server.server_url = server_url
    if game_id is not None:
        config.server.game_id = game_id
    save_global_config(config)
    info(f"Server set to {config.server.server_url} (game {config.server.game_id})")
