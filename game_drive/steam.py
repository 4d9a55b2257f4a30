"""Steam root and library detection, and prefix lookup by app id."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .prefix import ProtonPrefix
from .vdf import VdfObject, parse_vdf_file

logger = logging.getLogger(__name__)

# Game names accepted by the CLI, compared with spaces and punctuation removed
KNOWN_APP_IDS = {
    "starfield": 1716740,
    "skyrim": 489830,
    "skyrimse": 489830,
    "skyrimspecialedition": 489830,
    "fallout4": 377160,
    "newvegas": 22380,
    "falloutnewvegas": 22380,
    "fallout3": 22300,
    "oblivion": 22330,
    "morrowind": 22320,
    "enderal": 933480,
    "enderalse": 976620,
    "enderalspecialedition": 976620,
    "holocure": 2420510,
}

# Either one marks a real Steam install; 64 bit only Steam may lack the first
STEAM_RUNTIME_DIRS = ["ubuntu12_32", "ubuntu12_64"]

STEAMAPPS = "steamapps"
COMPATDATA = "compatdata"
PFX = "pfx"
LIBRARY_FOLDERS_VDF = "libraryfolders.vdf"


def resolve_app_id(game: str | int) -> int | None:
    """Turn a numeric app id or a known game name into an app id."""
    if isinstance(game, int):
        return game
    game = game.strip()
    if game.isdigit():
        return int(game)
    return KNOWN_APP_IDS.get(re.sub(r"[^a-z0-9]", "", game.lower()))


def has_runtime(path: Path) -> bool:
    """Check for the Steam runtime directory that marks a Steam root."""
    return any((path / name).is_dir() for name in STEAM_RUNTIME_DIRS)


def find_steamapps_dir(path: Path) -> Path | None:
    """Find the steamapps directory, which may be spelled with any case."""
    try:
        entries = list(path.iterdir())
    except OSError:
        return None

    for entry in entries:
        if entry.name.lower() == STEAMAPPS and entry.is_dir():
            return entry
    return None


def _library_path(entry: VdfObject) -> Path | None:
    # An empty string would turn into the working directory
    path = entry.get("path")
    if not isinstance(path, str) or not path:
        return None
    return Path(path)


@dataclass(frozen=True)
class SteamLibrary:
    """A Steam library folder that has a compatdata directory."""

    steamapps: Path
    is_root: bool = False

    @classmethod
    def from_path(cls, library: Path) -> "SteamLibrary | None":
        """
        Validate a library folder.

        Pass the library folder as configured in Steam, not the steamapps
        folder inside it.
        """
        library = Path(library)
        steamapps = find_steamapps_dir(library)
        if steamapps is None:
            return None
        if not (steamapps / COMPATDATA).exists():
            logger.debug("Library %s has no %s folder", library, COMPATDATA)
            return None
        return cls(steamapps, is_root=has_runtime(library))

    @property
    def path(self) -> Path:
        return self.steamapps.parent

    def get_prefix(self, app_id: int) -> ProtonPrefix | None:
        """
        Look for the app's prefix in this library only.

        The game may be installed here while its prefix stays in the root
        library (Steam Deck SD cards), or this may be leftover data from a
        previous install. SteamRoot.get_prefix accounts for both.
        """
        return ProtonPrefix.from_path(self.steamapps / COMPATDATA / str(app_id) / PFX, app_id)

    def promote_to_root(self) -> "SteamRoot | None":
        """Get the SteamRoot back, only possible for the root library."""
        if not self.is_root:
            return None
        return SteamRoot.from_path(self.steamapps.parent)


@dataclass(frozen=True)
class SteamRoot:
    """An existing Steam installation with a runtime and a steamapps folder."""

    path: Path
    steamapps: Path

    @classmethod
    def from_path(cls, path: Path) -> "SteamRoot | None":
        """Verify that a Steam root exists at the given path."""
        path = Path(path)
        if not path.is_dir():
            return None
        if not has_runtime(path):
            logger.debug("%s has no Steam runtime", path)
            return None
        steamapps = find_steamapps_dir(path)
        if steamapps is None:
            logger.debug("%s has no %s folder", path, STEAMAPPS)
            return None
        return cls(path, steamapps)

    @property
    def library_folders_vdf(self) -> Path:
        return self.steamapps / LIBRARY_FOLDERS_VDF

    def read_library_folders(self) -> VdfObject | None:
        """Return the "libraryfolders" object of libraryfolders.vdf."""
        doc = parse_vdf_file(self.library_folders_vdf)
        if doc is None:
            return None
        folders = doc.get("libraryfolders")
        if not isinstance(folders, dict):
            logger.debug("No libraryfolders object in %s", self.library_folders_vdf)
            return None
        return folders

    def get_install_library(self, app_id: int) -> SteamLibrary | None:
        """
        Find the library libraryfolders.vdf says the game is installed in.

        Steam updates the file lazily, so a recently moved game is still
        listed at its old location.
        """
        folders = self.read_library_folders()
        if folders is None:
            return None

        key = str(app_id)
        for entry in folders.values():
            if not isinstance(entry, dict):
                continue
            path = _library_path(entry)
            apps = entry.get("apps")
            if path is not None and isinstance(apps, dict) and key in apps:
                return SteamLibrary.from_path(path)

        return None

    resolve_library_for_app = get_install_library

    def list_libraries(self) -> list[SteamLibrary]:
        """All libraries of this root; never empty, the root library is the fallback."""
        libraries = []

        folders = self.read_library_folders()
        if folders is not None:
            for entry in folders.values():
                if not isinstance(entry, dict):
                    continue
                path = _library_path(entry)
                if path is None:
                    continue
                library = SteamLibrary.from_path(path)
                if library is not None:
                    libraries.append(library)

        if not libraries:
            logger.debug("Falling back to the root library of %s", self.path)
            libraries.append(SteamLibrary(self.steamapps, is_root=True))

        return libraries

    def get_prefix(self, app_id: int) -> ProtonPrefix | None:
        """Find the prefix of a game in any library of this root."""
        library = self.get_install_library(app_id)
        if library is not None:
            prefix = library.get_prefix(app_id)
            if prefix is not None:
                return prefix
            logger.debug("Stale library entry for %s, scanning all libraries", app_id)

        for library in self.list_libraries():
            prefix = library.get_prefix(app_id)
            if prefix is not None:
                return prefix

        return None
