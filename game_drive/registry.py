"""Reader for Wine registry files (user.reg, system.reg)."""

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_section(section: str) -> str:
    """
    Convert a Windows style key path into the form used in section headers.

    Registry files store every separator as a doubled backslash. Both
    "Software\\Wine" and an already doubled path are accepted.
    """
    return section.replace("\\\\", "\\").replace("\\", "\\\\")


def _section_header(line: str) -> str | None:
    if not line.startswith("["):
        return None
    # Anything after "]" is a timestamp we don't care about
    name, sep, _ = line[1:].partition("]")
    return name if sep else None


def _read_value(line: str, values: dict[str, str]) -> None:
    if not line.startswith('"'):
        return

    key, sep, rest = line[1:].partition('"')
    if not sep:
        return

    value = ""
    if rest.startswith("="):
        _, sep, quoted = rest[1:].partition('"')
        if sep:
            text, sep, _ = quoted.partition('"')
            if sep:
                value = text

    # dword:, hex: and friends are kept with an empty value
    values[key] = value


def open_section(lines: Iterable[str], section: str) -> dict[str, str] | None:
    """
    Collect the values of one registry section.

    Args:
        lines: An open registry file or any iterable of its lines
        section: Key path, e.g. "Software\\Wine\\Drives"

    Returns the values defined between the section header and the next
    header, or None if the section does not appear.
    """
    wanted = normalize_section(section)
    values: dict[str, str] | None = None

    for line in lines:
        stripped = line.strip()
        header = _section_header(stripped)

        if header is not None:
            if values is not None:
                break
            if header == wanted:
                values = {}
            continue

        if values is not None:
            _read_value(stripped, values)

    return values


def read_section(reg_file: Path, section: str) -> dict[str, str] | None:
    """Open a registry file and read a single section from it."""
    try:
        with open(reg_file, encoding="utf-8", errors="replace") as f:
            values = open_section(f, section)
    except OSError as e:
        logger.debug("Could not read registry file %s: %s", reg_file, e)
        return None

    if values is None:
        logger.debug("Section %r not found in %s", section, reg_file)
    return values


class RegistryFile:
    """Handle on a registry file; every lookup re-reads it from disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def open(cls, path: Path) -> "RegistryFile | None":
        """Return a handle if the file exists, None otherwise."""
        path = Path(path)
        if not path.is_file():
            return None
        return cls(path)

    def open_key(self, section: str) -> dict[str, str] | None:
        return read_section(self.path, section)

    def get(self, section: str, name: str) -> str | None:
        """Look up a single value, None if the section or value is missing."""
        values = self.open_key(section)
        if values is None:
            return None
        return values.get(name)
