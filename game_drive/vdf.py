"""Parser for the Valve KeyValues text format used by libraryfolders.vdf."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

VdfValue = Union[str, "VdfObject"]
VdfObject = dict[str, VdfValue]


class VdfParseError(Exception):
    """Raised when a KeyValues document is malformed or truncated."""

    pass


# libraryfolders.vdf nests four levels deep
MAX_DEPTH = 64


def _parse_object(lines: Iterator[str], depth: int = 0) -> VdfObject:
    if depth > MAX_DEPTH:
        raise VdfParseError(f"Objects nested deeper than {MAX_DEPTH} levels")

    obj: VdfObject = {}

    for line in lines:
        stripped = line.strip()

        if stripped == "}":
            return obj

        if not stripped:
            continue

        if not stripped.startswith('"'):
            # Covers a stray "{" as well, it is only valid right after a key
            raise VdfParseError(f"Unexpected line: {stripped!r}")

        key, sep, rest = stripped[1:].partition('"')
        if not sep:
            raise VdfParseError(f"Unterminated key: {stripped!r}")

        _, sep, value_part = rest.strip().partition('"')
        if sep:
            value, sep, _ = value_part.partition('"')
            if not sep:
                raise VdfParseError(f"Unterminated value for key {key!r}")
            obj[key] = value
            continue

        # No value on the key line, so an object has to open on the next one
        opener = next(lines, None)
        if opener is None:
            raise VdfParseError(f"Unexpected end of input after key {key!r}")
        if opener.strip() != "{":
            raise VdfParseError(f"Expected '{{' after key {key!r}, got {opener.strip()!r}")

        obj[key] = _parse_object(lines, depth + 1)

    # The outermost object may omit its closing brace
    if depth == 0:
        return obj

    raise VdfParseError("Unexpected end of input inside an object")


def parse_vdf_lines(lines: Iterable[str]) -> VdfObject:
    """Parse KeyValues text given as an iterable of lines."""
    return _parse_object(iter(lines))


def parse_vdf(text: str) -> VdfObject:
    """Parse a KeyValues document from a string."""
    return parse_vdf_lines(text.splitlines())


def parse_vdf_file(path: Path) -> VdfObject | None:
    """
    Parse a KeyValues file.

    Made for libraryfolders.vdf, other vdf files may not parse. Returns None
    when the file is missing, unreadable or malformed; partial results are
    never returned.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return parse_vdf_lines(f)
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
    except VdfParseError as e:
        logger.debug("Malformed vdf file %s: %s", path, e)

    return None


def vdf_get(doc: VdfObject, *keys: str) -> VdfValue | None:
    """Follow a key path through nested objects, returning None if it breaks."""
    node: VdfValue = doc
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
        if node is None:
            return None
    return node
