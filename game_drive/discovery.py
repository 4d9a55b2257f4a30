"""
Locate Steam roots and Proton prefixes.

Search order:
    $STEAM_DIR (skipped if unset or no_tricks is set)
    ~/.steam/steam
    ~/.local/share/Steam
    ~/.var/app/com.valvesoftware.Steam/data/Steam

Every search returns one of two result types. Outcome means STEAM_DIR was
unset, disabled or valid. OverrideWarning means STEAM_DIR was set but does not
point to a Steam root; the search still ran over the standard locations and
the payload is what it found, so callers should warn the user and carry on.
In both, a value of None (or an empty list) means nothing was found, usually
because the game has not been launched once yet.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar, Union

from .config import DiscoveryConfig
from .prefix import ProtonPrefix
from .steam import SteamRoot

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Search result with STEAM_DIR unset, disabled, or valid."""

    value: T | None = None

    @property
    def override_invalid(self) -> bool:
        return False


@dataclass(frozen=True)
class OverrideWarning(Generic[T]):
    """Search result when STEAM_DIR was set but invalid."""

    value: T | None = None

    @property
    def override_invalid(self) -> bool:
        return True


DiscoveryResult = Union[Outcome[T], OverrideWarning[T]]


def _wrap(value, override_invalid: bool):
    if override_invalid:
        return OverrideWarning(value)
    return Outcome(value)


@dataclass
class _Search:
    """Tracks the override flag across the steps of one search."""

    config: DiscoveryConfig
    override_invalid: bool = False

    def result(self, value):
        return _wrap(value, self.override_invalid)


class OverrideState(Enum):
    UNSET = "unset"
    INVALID = "invalid"


def steam_dir_env_path(config: DiscoveryConfig | None = None) -> Path | OverrideState:
    """
    Return the directory named by STEAM_DIR.

    Ignores no_tricks. Returns OverrideState.UNSET if the variable is not set
    and OverrideState.INVALID if it does not name an existing directory.
    """
    config = config or DiscoveryConfig.from_env()
    if config.steam_dir is None:
        return OverrideState.UNSET
    if not config.steam_dir:
        return OverrideState.INVALID

    path = Path(config.steam_dir)
    if not path.is_dir():
        return OverrideState.INVALID
    return path


def steam_root_env(config: DiscoveryConfig | None = None) -> SteamRoot | OverrideState:
    """Build a SteamRoot from STEAM_DIR, or return the OverrideState why not."""
    path = steam_dir_env_path(config)
    if isinstance(path, OverrideState):
        return path
    root = SteamRoot.from_path(path)
    if root is None:
        return OverrideState.INVALID
    return root


def _probe_override(search: _Search) -> SteamRoot | None:
    if not search.config.override_enabled:
        return None

    root = steam_root_env(search.config)
    if isinstance(root, SteamRoot):
        logger.debug("Using STEAM_DIR %s", root.path)
        return root

    if root is OverrideState.INVALID:
        logger.debug("STEAM_DIR %r is not a Steam root", search.config.steam_dir)
        search.override_invalid = True
    return None


def find_steam_root(config: DiscoveryConfig | None = None) -> DiscoveryResult[SteamRoot]:
    """Return the first Steam root found."""
    search = _Search(config or DiscoveryConfig.from_env())

    root = _probe_override(search)
    if root is not None:
        return search.result(root)

    for path in search.config.standard_locations():
        logger.debug("Probing %s", path)
        root = SteamRoot.from_path(path)
        if root is not None:
            return search.result(root)

    return search.result(None)


def _same_target(link: Path, other: Path) -> bool:
    if not link.is_symlink():
        return False
    try:
        return link.resolve(strict=True) == other.resolve(strict=True)
    except (OSError, RuntimeError):
        return False


def find_all_steam_roots(
    config: DiscoveryConfig | None = None,
) -> DiscoveryResult[list[SteamRoot]]:
    """
    Return every Steam root found, in search order.

    ~/.steam/steam usually links to ~/.local/share/Steam, in which case the
    install is only listed once.
    """
    search = _Search(config or DiscoveryConfig.from_env())
    roots: list[SteamRoot] = []

    root = _probe_override(search)
    if root is not None:
        roots.append(root)

    # Setting STEAM_DIR to one of the standard locations lists it twice
    dot_steam, local_share, flatpak = search.config.standard_locations()

    logger.debug("Probing %s", dot_steam)
    root = SteamRoot.from_path(dot_steam)
    if root is not None:
        roots.append(root)

    if _same_target(dot_steam, local_share):
        logger.debug("%s links to %s, skipping", dot_steam, local_share)
    else:
        logger.debug("Probing %s", local_share)
        root = SteamRoot.from_path(local_share)
        if root is not None:
            roots.append(root)

    logger.debug("Probing %s", flatpak)
    root = SteamRoot.from_path(flatpak)
    if root is not None:
        roots.append(root)

    return search.result(roots)


def find_prefix(
    app_id: int, config: DiscoveryConfig | None = None
) -> DiscoveryResult[ProtonPrefix]:
    """
    Return the first prefix found for a game.

    Multiple Steam installs may each hold one; the first root in search
    order wins, which is not necessarily STEAM_DIR.
    """
    roots = find_all_steam_roots(config)

    for root in roots.value:
        prefix = root.get_prefix(app_id)
        if prefix is not None:
            return _wrap(prefix, roots.override_invalid)

    return _wrap(None, roots.override_invalid)


def find_all_prefixes(
    app_id: int, config: DiscoveryConfig | None = None
) -> DiscoveryResult[list[ProtonPrefix]]:
    """Return the prefix of a game from every Steam root that has one."""
    roots = find_all_steam_roots(config)

    prefixes = []
    for root in roots.value:
        prefix = root.get_prefix(app_id)
        if prefix is not None:
            prefixes.append(prefix)

    return _wrap(prefixes, roots.override_invalid)
