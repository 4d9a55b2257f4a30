"""Command-line interface for game-drive."""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ENV_NO_TRICKS, ENV_STEAM_DIR, DiscoveryConfig
from .discovery import (
    find_all_prefixes,
    find_all_steam_roots,
    find_prefix,
    find_steam_root,
)
from .prefix import ProtonPrefix
from .steam import resolve_app_id

console = Console()

FOLDER_LABELS = {
    "c_drive": "C drive",
    "home": "Home",
    "appdata_roaming": "AppData\\Roaming",
    "appdata_local": "AppData\\Local",
    "appdata_local_low": "AppData\\LocalLow",
    "music": "Music",
    "videos": "Videos",
    "pictures": "Pictures",
    "documents": "Documents",
    "downloads": "Downloads",
    "desktop": "Desktop",
    "public": "Public",
}


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _config(ctx: click.Context) -> DiscoveryConfig:
    return ctx.obj["config"]


def _unwrap(result):
    """Print the STEAM_DIR warning if needed and return the payload."""
    if result.override_invalid:
        console.print(
            f"[yellow]Warning:[/yellow] {ENV_STEAM_DIR} does not point to a Steam "
            "installation, it was ignored."
        )
    return result.value


def _app_id(game: str) -> int:
    app_id = resolve_app_id(game)
    if app_id is None:
        console.print(f"[red]Error:[/red] Unknown game '{game}', pass a Steam app id")
        sys.exit(1)
    return app_id


def _require_prefix(ctx: click.Context, game: str) -> ProtonPrefix:
    app_id = _app_id(game)
    prefix = _unwrap(find_prefix(app_id, _config(ctx)))
    if prefix is None:
        console.print(f"[red]Error:[/red] No Proton prefix found for app {app_id}.")
        console.print("The game needs to be installed and launched once.")
        sys.exit(1)
    return prefix


@click.group()
@click.option(
    "--steam-dir",
    envvar=ENV_STEAM_DIR,
    help=f"Steam installation to search first (or set {ENV_STEAM_DIR} env var)",
)
@click.option(
    "--no-tricks",
    is_flag=True,
    envvar=ENV_NO_TRICKS,
    help=f"Ignore {ENV_STEAM_DIR} entirely",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every probed location")
@click.pass_context
def main(
    ctx: click.Context, steam_dir: str | None, no_tricks: bool, verbose: bool
) -> None:
    """Locate the Windows user folders of Steam games running under Proton."""
    _setup_logging(verbose)
    if steam_dir is None:
        # click treats an empty variable as unset, an empty STEAM_DIR is invalid
        steam_dir = os.environ.get(ENV_STEAM_DIR)
    ctx.ensure_object(dict)
    ctx.obj["config"] = DiscoveryConfig(steam_dir=steam_dir, no_tricks=no_tricks)


@main.command()
@click.pass_context
def roots(ctx: click.Context) -> None:
    """List every Steam installation found."""
    found = _unwrap(find_all_steam_roots(_config(ctx)))
    if not found:
        console.print("[red]Error:[/red] No Steam installation found.")
        sys.exit(1)

    table = Table(title="Steam roots")
    table.add_column("Path", style="cyan")
    table.add_column("steamapps", style="green")
    for root in found:
        table.add_row(str(root.path), str(root.steamapps))
    console.print(table)


@main.command()
@click.pass_context
def libraries(ctx: click.Context) -> None:
    """List the libraries of the first Steam installation."""
    root = _unwrap(find_steam_root(_config(ctx)))
    if root is None:
        console.print("[red]Error:[/red] No Steam installation found.")
        sys.exit(1)

    console.print(f"[bold]Steam root:[/bold] {root.path}")

    table = Table(title="Libraries")
    table.add_column("steamapps", style="cyan")
    table.add_column("Root library")
    for library in root.list_libraries():
        table.add_row(
            str(library.steamapps),
            "[green]yes[/green]" if library.is_root else "no",
        )
    console.print(table)


@main.command()
@click.argument("game")
@click.option("--all", "show_all", is_flag=True, help="List prefixes from every Steam root")
@click.pass_context
def prefix(ctx: click.Context, game: str, show_all: bool) -> None:
    """
    Show the Proton prefix of a game.

    GAME: Steam app id or a known game name
    """
    if not show_all:
        click.echo(str(_require_prefix(ctx, game).pfx))
        return

    app_id = _app_id(game)
    prefixes = _unwrap(find_all_prefixes(app_id, _config(ctx)))
    if not prefixes:
        console.print(f"[red]Error:[/red] No Proton prefix found for app {app_id}.")
        sys.exit(1)
    for found in prefixes:
        click.echo(str(found.pfx))


@main.command()
@click.argument("game")
@click.pass_context
def folders(ctx: click.Context, game: str) -> None:
    """
    Show the user folders inside a game's prefix.

    GAME: Steam app id or a known game name
    """
    pfx = _require_prefix(ctx, game)
    console.print(f"[bold]Prefix:[/bold] {pfx.pfx}")

    table = Table(title=f"Folders for app {pfx.app_id}")
    table.add_column("Folder", style="cyan")
    table.add_column("Path")
    for name, path in pfx.folders().items():
        table.add_row(FOLDER_LABELS.get(name, name), str(path) if path else "[dim]-[/dim]")
    console.print(table)


@main.command()
@click.argument("game")
@click.argument("windows_path")
@click.option("--resolve", is_flag=True, help="Resolve symlinks, fail if the path is missing")
@click.pass_context
def translate(ctx: click.Context, game: str, windows_path: str, resolve: bool) -> None:
    """
    Translate a Windows path into the prefix of a game.

    GAME: Steam app id or a known game name
    WINDOWS_PATH: Absolute Windows path, e.g. 'C:\\users\\steamuser'
    """
    pfx = _require_prefix(ctx, game)
    path: Path = pfx.parse_windows_path(windows_path)

    if resolve:
        try:
            path = path.resolve(strict=True)
        except (OSError, RuntimeError):
            console.print(f"[red]Error:[/red] {path} does not exist.")
            sys.exit(1)

    click.echo(str(path))


if __name__ == "__main__":
    main()
