"""Find the Windows user folders of Steam games running under Proton."""

from .config import DiscoveryConfig
from .discovery import (
    Outcome,
    OverrideWarning,
    find_all_prefixes,
    find_all_steam_roots,
    find_prefix,
    find_steam_root,
)
from .prefix import ProtonPrefix, translate_windows_path
from .steam import SteamLibrary, SteamRoot

__version__ = "0.1.0"

__all__ = [
    "DiscoveryConfig",
    "Outcome",
    "OverrideWarning",
    "ProtonPrefix",
    "SteamLibrary",
    "SteamRoot",
    "find_all_prefixes",
    "find_all_steam_roots",
    "find_prefix",
    "find_steam_root",
    "translate_windows_path",
]
