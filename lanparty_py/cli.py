"""
Command-line interface for lan-party-tools.

This module provides the command-line entry point: ``ping``, ``network``,
``version`` and the ``steam`` commands that list, back up and restore games.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from lanparty_py import __version__
from lanparty_py.config import (
    ENV_DESTINATION,
    ENV_SOURCE,
    ENV_STEAMAPPS,
    LanPartyConfig,
    resolve_location,
)
from lanparty_py.exceptions import LanPartyError, NetworkError
from lanparty_py.network import list_interfaces, public_addresses
from lanparty_py.progress import RichSyncObserver
from lanparty_py.steam.listing import InstalledApp, iter_installed_apps
from lanparty_py.steam.steamapps import SteamApps
from lanparty_py.steam.sync import SyncReport, backup, restore

# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_STARTED = 2

# Set up the console and logger
console = Console()
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger("lanparty")

app = typer.Typer(
    help="Tools for LAN parties: network info and Steam game backups.",
    add_completion=False,
)
steam_app = typer.Typer(
    help="List, back up and restore games of a Steam library.",
    add_completion=False,
)
app.add_typer(steam_app, name="steam")


def log_error(message: str) -> None:
    """Log an error message to both logger and console."""
    logger.error(message)
    console.print(f"[red]{escape(message)}[/red]")
    return None


def get_config(ctx: typer.Context) -> LanPartyConfig:
    """Return the config loaded by the app callback."""
    if isinstance(ctx.obj, LanPartyConfig):
        return ctx.obj
    return LanPartyConfig.load()


def open_library(location: Optional[str], role: str) -> SteamApps:
    """Build a ``SteamApps``, exiting when no default location is known."""
    try:
        return SteamApps.from_console_input(location, role=role)
    except LanPartyError as e:
        log_error(str(e))
        raise typer.Exit(EXIT_NOT_STARTED) from e


def same_directory(a: SteamApps, b: SteamApps) -> bool:
    return a.location.resolve() == b.location.resolve()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output."
    ),
    json: bool = typer.Option(False, "--json", help="Output logs in JSON format."),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the config file "
        "(default: ~/.config/lan-party-tools/config.yaml).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show the application version and exit."
    ),
) -> None:
    """
    lan-party-tools: network info and Steam game backups for LAN parties.
    """
    if version:
        console.print(f"lan-party-tools version: {__version__}")
        raise typer.Exit()

    # Configure logging level based on verbosity
    if verbose:
        logger.setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    # Configure JSON logging if requested
    if json:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        logging.basicConfig(
            level=logging.INFO if not verbose else logging.DEBUG,
            format='{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"message": "%(message)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stdout,
        )
        logger.debug("JSON logging enabled")

    ctx.obj = LanPartyConfig.load(Path(config).expanduser() if config else None)


@app.command()
def ping() -> None:
    """Answer with Pong!"""
    typer.echo("Pong!")


@app.command()
def network() -> None:
    """
    Show local network interfaces and the public IP address.
    """
    try:
        interfaces = list_interfaces()
    except NetworkError as e:
        log_error(str(e))
        raise typer.Exit(EXIT_FAILED) from e

    for interface in interfaces:
        typer.echo(interface.name)
        for address in interface.addresses:
            typer.echo(str(address))
        typer.echo("")

    typer.echo("Public IP")
    try:
        addresses = public_addresses()
    except NetworkError as e:
        log_error(str(e))
        raise typer.Exit(EXIT_FAILED) from e
    for address in addresses:
        typer.echo(address)


@steam_app.command(name="list")
def steam_list(
    ctx: typer.Context,
    steamapps: Annotated[
        Optional[str],
        typer.Option(
            "--steamapps",
            "-s",
            help="Path to the steamapps folder. Uses LANPARTY_STEAMAPPS env var, "
            "the config file or the platform default if not set.",
        ),
    ] = None,
    table: Annotated[
        bool, typer.Option("--table", help="Show the games as a table.")
    ] = False,
) -> None:
    """
    List the games installed in a Steam library.
    """
    cfg = get_config(ctx)
    library = open_library(
        resolve_location(steamapps, ENV_STEAMAPPS, cfg.steamapps), "steamapps"
    )
    logger.debug(f"Listing games in {library.location}")

    apps: List[InstalledApp] = []
    try:
        for installed in iter_installed_apps(library):
            if table:
                apps.append(installed)
            else:
                typer.echo(str(installed))
    except LanPartyError as e:
        log_error(str(e))
        raise typer.Exit(EXIT_FAILED) from e

    if table:
        games = Table(title=f"Games in {library.location}")
        games.add_column("App ID")
        games.add_column("Name")
        for installed in apps:
            games.add_row(installed.appid, installed.name)
        console.print(games)


def run_sync(
    direction: str,
    library: SteamApps,
    peer: SteamApps,
    appids: List[str],
    buffer_size: int,
) -> None:
    """Run a backup or restore and exit with a status reflecting the outcome."""
    if same_directory(library, peer):
        log_error(
            f"The steamapps folder and the {peer.role} are the same directory: "
            f"{library.location}"
        )
        raise typer.Exit(EXIT_NOT_STARTED)

    observer = RichSyncObserver(console, direction=direction)
    report: SyncReport
    try:
        if direction == "backup":
            report = backup(library, peer, appids, observer, buffer_size)
        else:
            report = restore(library, peer, appids, observer, buffer_size)
    except LanPartyError as e:
        log_error(str(e))
        raise typer.Exit(EXIT_NOT_STARTED) from e

    if report.ok:
        console.print(f"[bold green]{report.summary()}[/bold green]")
    else:
        console.print(f"[bold red]{report.summary()}[/bold red]")
        raise typer.Exit(EXIT_FAILED)


@steam_app.command(name="backup")
def steam_backup(
    ctx: typer.Context,
    appids: Annotated[
        Optional[List[str]],
        typer.Argument(help="App ids of the games to back up."),
    ] = None,
    steamapps: Annotated[
        Optional[str],
        typer.Option(
            "--steamapps",
            "-s",
            help="Path to the steamapps folder. Uses LANPARTY_STEAMAPPS env var, "
            "the config file or the platform default if not set.",
        ),
    ] = None,
    destination: Annotated[
        Optional[str],
        typer.Option(
            "--destination",
            "-d",
            help="Folder to back up to. Uses LANPARTY_DESTINATION env var or "
            "the config file if not set.",
        ),
    ] = None,
) -> None:
    """
    Back up games and their appmanifests to another folder.
    """
    cfg = get_config(ctx)
    library = open_library(
        resolve_location(steamapps, ENV_STEAMAPPS, cfg.steamapps), "steamapps"
    )
    peer = open_library(
        resolve_location(destination, ENV_DESTINATION, cfg.destination),
        "destination",
    )
    logger.info(f"Backing up to {peer.location}...")
    run_sync("backup", library, peer, appids or [], cfg.buffer_size)


@steam_app.command(name="restore")
def steam_restore(
    ctx: typer.Context,
    appids: Annotated[
        Optional[List[str]],
        typer.Argument(help="App ids of the games to restore."),
    ] = None,
    steamapps: Annotated[
        Optional[str],
        typer.Option(
            "--steamapps",
            "-s",
            help="Path to the steamapps folder. Uses LANPARTY_STEAMAPPS env var, "
            "the config file or the platform default if not set.",
        ),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option(
            "--source",
            help="Folder to restore from. Uses LANPARTY_SOURCE env var or "
            "the config file if not set.",
        ),
    ] = None,
) -> None:
    """
    Restore games and their appmanifests from a backup folder.
    """
    cfg = get_config(ctx)
    library = open_library(
        resolve_location(steamapps, ENV_STEAMAPPS, cfg.steamapps), "steamapps"
    )
    peer = open_library(resolve_location(source, ENV_SOURCE, cfg.source), "source")
    logger.info(f"Restoring from {peer.location}...")
    run_sync("restore", library, peer, appids or [], cfg.buffer_size)


@app.command()
def version() -> None:
    """Show the application version and exit."""
    console.print(f"lan-party-tools version: {__version__}")


if __name__ == "__main__":
    app()
