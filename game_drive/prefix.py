"""Proton/Wine prefix access: special folders and Windows path translation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .registry import RegistryFile

logger = logging.getLogger(__name__)

USER_REG = "user.reg"
SYSTEM_REG = "system.reg"
DOS_DEVICES = "dosdevices"

REG_SHELL_FOLDERS = "Software\\Microsoft\\Windows\\CurrentVersion\\Explorer\\Shell Folders"
REG_VOLATILE = "Volatile Environment"
REG_PROFILE_LIST = "Software\\Microsoft\\Windows NT\\CurrentVersion\\ProfileList"

# (section, value name) per folder, all read from user.reg
USER_FOLDERS = {
    "home": (REG_VOLATILE, "USERPROFILE"),
    "appdata_roaming": (REG_SHELL_FOLDERS, "AppData"),
    "appdata_local": (REG_SHELL_FOLDERS, "Local AppData"),
    # LocalLow has no short name, only its known folder GUID
    "appdata_local_low": (REG_SHELL_FOLDERS, "{A520A1A4-1780-4FF6-BD18-167343C5AF16}"),
    "music": (REG_SHELL_FOLDERS, "My Music"),
    "videos": (REG_SHELL_FOLDERS, "My Videos"),
    "pictures": (REG_SHELL_FOLDERS, "My Pictures"),
    "documents": (REG_SHELL_FOLDERS, "Personal"),
    "downloads": (REG_SHELL_FOLDERS, "{374DE290-123F-4565-9164-39C4925E467B}"),
    "desktop": (REG_SHELL_FOLDERS, "Desktop"),
}


def translate_windows_path(pfx: Path, value: str) -> Path:
    """
    Map an absolute Windows path onto the dosdevices tree of a prefix.

    Accepts both registry style (doubled backslashes) and plain paths. The
    result is not resolved, so it may point through drive symlinks.
    """
    if not value:
        return Path(pfx)

    path = value.replace("\\\\", "/").replace("\\", "/")
    # Drive links inside dosdevices are lowercase
    path = path[0].lower() + path[1:]

    return Path(pfx) / DOS_DEVICES / path.lstrip("/")


def _resolve(path: Path) -> Path | None:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


@dataclass(frozen=True)
class ProtonPrefix:
    """
    A Wine prefix holding the Windows-like tree a game sees.

    app_id is 0 for a generic prefix not tied to a Steam app.
    """

    pfx: Path
    app_id: int = 0

    @classmethod
    def from_path(cls, pfx: Path, app_id: int = 0) -> "ProtonPrefix | None":
        """Validate a prefix directory, works for any wineprefix."""
        pfx = Path(pfx)
        if not pfx.is_dir():
            return None
        if (pfx / USER_REG).is_file() and (pfx / DOS_DEVICES).is_dir():
            return cls(pfx, app_id)
        logger.debug("%s is not a wine prefix", pfx)
        return None

    @property
    def user_reg(self) -> Path:
        return self.pfx / USER_REG

    @property
    def system_reg(self) -> Path:
        return self.pfx / SYSTEM_REG

    def parse_windows_path(self, value: str) -> Path:
        return translate_windows_path(self.pfx, value)

    def c_drive(self) -> Path:
        """The C drive of the prefix, not checked against the filesystem."""
        return self.parse_windows_path("C:\\")

    def get_path_from_registry(
        self, section: str, name: str, reg_file: str = USER_REG
    ) -> Path | None:
        """Read a Windows path from a registry file and resolve it in the prefix."""
        registry = RegistryFile.open(self.pfx / reg_file)
        if registry is None:
            return None

        value = registry.get(section, name)
        if value is None:
            logger.debug("No value %r in [%s] of %s", name, section, registry.path)
            return None

        return _resolve(self.parse_windows_path(value))

    def _user_folder(self, folder: str) -> Path | None:
        section, name = USER_FOLDERS[folder]
        return self.get_path_from_registry(section, name)

    def home_dir(self) -> Path | None:
        """The user profile, usually C:\\users\\steamuser."""
        return self._user_folder("home")

    def appdata_roaming(self) -> Path | None:
        return self._user_folder("appdata_roaming")

    def appdata_local(self) -> Path | None:
        return self._user_folder("appdata_local")

    def appdata_local_low(self) -> Path | None:
        return self._user_folder("appdata_local_low")

    def music_dir(self) -> Path | None:
        return self._user_folder("music")

    def videos_dir(self) -> Path | None:
        return self._user_folder("videos")

    def pictures_dir(self) -> Path | None:
        return self._user_folder("pictures")

    def documents_dir(self) -> Path | None:
        return self._user_folder("documents")

    def downloads_dir(self) -> Path | None:
        return self._user_folder("downloads")

    def desktop_dir(self) -> Path | None:
        return self._user_folder("desktop")

    def public_user_dir(self) -> Path | None:
        """The shared Public profile, read from the machine registry."""
        return self.get_path_from_registry(REG_PROFILE_LIST, "Public", SYSTEM_REG)

    def folders(self) -> dict[str, Path | None]:
        """Every known folder of the prefix, in display order."""
        result: dict[str, Path | None] = {"c_drive": self.c_drive()}
        for folder in USER_FOLDERS:
            result[folder] = self._user_folder(folder)
        result["public"] = self.public_user_dir()
        return result
