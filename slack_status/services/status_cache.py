"""Persisted record of the last status pushed to Slack.

The cache is a single flat JSON document in the user cache directory:

    {"text": "vacation", "emoji": ":beach:", "expiration": 1760000000,
     "manually_set": true}

It is written with temp-file + atomic replace semantics so a reader never
sees a half-written file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from slack_status.config import StatusTemplate
from slack_status.errors import CacheReadError, CacheWriteError
from slack_status.utils.paths import AppPaths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Automatic:
    """The cached status was set from the location; it never blocks updates."""

    def is_active(self, now: int) -> bool:
        return False


@dataclass(frozen=True)
class ManualHold:
    """The cached status was set by hand and blocks automatic updates.

    expires_at is None for a manual status without expiry, which holds
    until another status is set by hand or the cache is reset.
    """

    expires_at: int | None

    def is_active(self, now: int) -> bool:
        return self.expires_at is None or self.expires_at > now


HoldState = Automatic | ManualHold


class CachedStatus(BaseModel):
    """Status as last sent to the API, and whether it was set by hand."""

    text: str
    emoji: str
    expiration: int
    manually_set: bool = False

    @property
    def hold(self) -> HoldState:
        if not self.manually_set:
            return Automatic()
        # 0 is Slack's "never expires", not a timestamp in the past.
        return ManualHold(expires_at=self.expiration or None)

    def to_template(self) -> StatusTemplate:
        return StatusTemplate(text=self.text, emoji=self.emoji)

    def __str__(self) -> str:
        return f"{self.emoji} {self.text}"


def _cleanup_temp_artifacts(temp_fd: int | None, temp_path: str | None) -> None:
    """Best-effort cleanup for temporary file descriptor and path."""
    if temp_fd is not None:
        try:
            os.close(temp_fd)
        except OSError:
            pass
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
        except OSError:
            pass


class StatusCache:
    """Load, save and reset the cached status file."""

    def __init__(self, paths: AppPaths | None = None):
        self._paths = paths or AppPaths.default()

    @property
    def path(self):
        return self._paths.cache_file

    def load(self) -> CachedStatus | None:
        """Read the cached status.

        Returns:
            The cached status, or None if no cache file exists yet.

        Raises:
            CacheReadError: The file exists but is unreadable or invalid.
        """
        path = self.path
        logger.debug("Looking for cache file in: %s", path)
        if not path.exists():
            logger.debug("No cache file yet")
            return None

        try:
            contents = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError("E-3001", path=path, detail=e) from e

        try:
            cached = CachedStatus.model_validate_json(contents)
        except ValidationError as e:
            raise CacheReadError(
                "E-3001", path=path, detail=f"{e.error_count()} validation error(s)",
            ) from e

        logger.debug("Cache file content: %s", contents)
        return cached

    def save(self, status: CachedStatus) -> None:
        """Persist status, fully replacing any previous value.

        Raises:
            CacheWriteError: The directory or file could not be written.
        """
        path = self.path
        payload = status.model_dump_json()
        temp_fd: int | None = None
        temp_path: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=str(path.parent))
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                temp_fd = None
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
            temp_path = None
        except OSError as e:
            _cleanup_temp_artifacts(temp_fd, temp_path)
            raise CacheWriteError("E-3002", path=path, detail=e) from e

        logger.info("Cache file saved")
        logger.debug("Cache file content: %s", payload)

    def reset(self) -> None:
        """Remove the cache file; a later load() returns None.

        Raises:
            CacheWriteError: The file exists but could not be removed.
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise CacheWriteError("E-3002", path=self.path, detail=e) from e
        logger.info("Cache file removed")
