"""Builders for fake Steam installs and Proton prefixes."""

import os
from pathlib import Path

import pytest

USER_REG = r"""WINE REGISTRY Version 2
;; All keys relative to \\User\\S-1-5-21-0-0-0-1000

#arch=win64

[Software\\Microsoft\\Windows\\CurrentVersion\\Explorer\\Shell Folders] 1700000000
#time=1da0c0ffee000000
"{374DE290-123F-4565-9164-39C4925E467B}"="C:\\users\\steamuser\\Downloads"
"{A520A1A4-1780-4FF6-BD18-167343C5AF16}"="C:\\users\\steamuser\\AppData\\LocalLow"
"AppData"="C:\\users\\steamuser\\AppData\\Roaming"
"Desktop"="C:\\users\\steamuser\\Desktop"
"Local AppData"="C:\\users\\steamuser\\AppData\\Local"
"My Music"="C:\\users\\steamuser\\Music"
"My Pictures"="C:\\users\\steamuser\\Pictures"
"My Videos"="C:\\users\\steamuser\\Videos"
"Personal"="C:\\users\\steamuser\\Documents"

[Software\\Wine\\DllOverrides] 1700000000
"d3d11"="native"

[Volatile Environment] 1700000000
#time=1da0c0ffee000000
"APPDATA"="C:\\users\\steamuser\\AppData\\Roaming"
"USERPROFILE"="C:\\users\\steamuser"
"""

SYSTEM_REG = r"""WINE REGISTRY Version 2
;; All keys relative to \\Machine

[Software\\Microsoft\\Windows NT\\CurrentVersion\\ProfileList] 1700000000
"Default"="C:\\users\\Default"
"ProfilesDirectory"="C:\\users"
"Public"="C:\\users\\Public"
"""

USER_DIRS = [
    "AppData/Roaming",
    "AppData/Local",
    "AppData/LocalLow",
    "Downloads",
    "Desktop",
    "Music",
    "Pictures",
    "Videos",
    "Documents",
]


def make_prefix(pfx: Path, user_reg: str | None = USER_REG, system_reg: str | None = SYSTEM_REG) -> Path:
    """Create a prefix with drive_c, a c: link in dosdevices and registry files."""
    drive_c = pfx / "drive_c"
    for rel in USER_DIRS:
        (drive_c / "users" / "steamuser" / rel).mkdir(parents=True, exist_ok=True)
    (drive_c / "users" / "Public").mkdir(parents=True, exist_ok=True)

    dosdevices = pfx / "dosdevices"
    dosdevices.mkdir(exist_ok=True)
    os.symlink("../drive_c", dosdevices / "c:")

    if user_reg is not None:
        (pfx / "user.reg").write_text(user_reg)
    if system_reg is not None:
        (pfx / "system.reg").write_text(system_reg)
    return pfx


def make_library(library: Path, steamapps_name: str = "steamapps") -> Path:
    """Create a library folder with an empty compatdata, return steamapps."""
    steamapps = library / steamapps_name
    (steamapps / "compatdata").mkdir(parents=True, exist_ok=True)
    return steamapps


def make_steam_root(
    root: Path,
    runtime: str = "ubuntu12_32",
    steamapps_name: str = "steamapps",
    library_folders: str | None = None,
) -> Path:
    """Create a Steam root, optionally with a libraryfolders.vdf."""
    (root / runtime).mkdir(parents=True, exist_ok=True)
    steamapps = make_library(root, steamapps_name)
    if library_folders is not None:
        (steamapps / "libraryfolders.vdf").write_text(library_folders)
    return root


def library_folders_vdf(*libraries: tuple[Path, list[int]]) -> str:
    """Render a libraryfolders.vdf listing (path, app ids) entries."""
    lines = ['"libraryfolders"', "{"]
    for index, (path, app_ids) in enumerate(libraries):
        lines += [
            f'\t"{index}"',
            "\t{",
            f'\t\t"path"\t\t"{path}"',
            '\t\t"label"\t\t""',
            '\t\t"contentid"\t\t"1234567890"',
            '\t\t"apps"',
            "\t\t{",
        ]
        lines += [f'\t\t\t"{app_id}"\t\t"0"' for app_id in app_ids]
        lines += ["\t\t}", "\t}"]
    lines.append("}")
    return "\n".join(lines) + "\n"


def add_app_prefix(steamapps: Path, app_id: int) -> Path:
    return make_prefix(steamapps / "compatdata" / str(app_id) / "pfx")


@pytest.fixture
def prefix_dir(tmp_path: Path) -> Path:
    return make_prefix(tmp_path / "pfx")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home
