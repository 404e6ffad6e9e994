"""Per-user file path resolution using platformdirs.

Configuration and cache live in the platform-appropriate directories:
  Linux: ~/.config/slack-status/ and ~/.cache/slack-status/
  macOS: ~/Library/Application Support/slack-status/ and ~/Library/Caches/slack-status/
  Windows: %LOCALAPPDATA%/nsd/slack-status/

Everything that touches these paths takes an AppPaths instance so tests can
point it at a temporary directory instead of the real user profile.
"""

from dataclasses import dataclass
from pathlib import Path

import platformdirs

APP_NAME = "slack-status"
APP_AUTHOR = "nsd"

CONFIG_FILE_NAME = "config.yaml"
CACHE_FILE_NAME = "status.json"


@dataclass(frozen=True)
class AppPaths:
    """Resolved configuration and cache directories for one run."""

    config_dir: Path
    cache_dir: Path

    @classmethod
    def default(cls) -> "AppPaths":
        """Return the platform user directories for slack-status."""
        return cls(
            config_dir=Path(platformdirs.user_config_dir(APP_NAME, APP_AUTHOR)),
            cache_dir=Path(platformdirs.user_cache_dir(APP_NAME, APP_AUTHOR)),
        )

    @classmethod
    def under(cls, root: Path) -> "AppPaths":
        """Return paths rooted in a single directory (tests, portable installs)."""
        return cls(config_dir=root / "config", cache_dir=root / "cache")

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def cache_file(self) -> Path:
        return self.cache_dir / CACHE_FILE_NAME
