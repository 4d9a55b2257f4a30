"""Configuration for Steam discovery."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

ENV_STEAM_DIR = "STEAM_DIR"
ENV_NO_TRICKS = "GAME_DRIVE_NO_TRICKS"

TRUTHY = {"1", "true", "yes", "on"}

# Standard Steam locations relative to the home directory, in search order
STEAM_DOT_STEAM = Path(".steam") / "steam"
STEAM_LOCAL_SHARE = Path(".local") / "share" / "Steam"
STEAM_FLATPAK = Path(".var") / "app" / "com.valvesoftware.Steam" / "data" / "Steam"

STANDARD_STEAM_DIRS = [STEAM_DOT_STEAM, STEAM_LOCAL_SHARE, STEAM_FLATPAK]


@dataclass
class DiscoveryConfig:
    """Inputs of a Steam search: the STEAM_DIR override and the home directory."""

    steam_dir: str | None = None
    no_tricks: bool = False
    home: Path = field(default_factory=Path.home)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, home: Path | None = None
    ) -> "DiscoveryConfig":
        """Build a config from environment variables (os.environ by default)."""
        if environ is None:
            environ = os.environ

        no_tricks = environ.get(ENV_NO_TRICKS, "").strip().lower() in TRUTHY
        return cls(
            steam_dir=environ.get(ENV_STEAM_DIR),
            no_tricks=no_tricks,
            home=Path(home) if home is not None else Path.home(),
        )

    @property
    def override_enabled(self) -> bool:
        """True when STEAM_DIR is set and allowed to be used."""
        return self.steam_dir is not None and not self.no_tricks

    def standard_locations(self) -> list[Path]:
        return [self.home / rel for rel in STANDARD_STEAM_DIRS]
