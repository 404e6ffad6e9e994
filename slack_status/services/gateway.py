"""Profile update gateway: send a resolved status and record it in the cache."""

import logging

from slack_status.services.protocol import ProfileClient
from slack_status.services.resolver import ResolvedStatus
from slack_status.services.status_cache import StatusCache

logger = logging.getLogger(__name__)


class ProfileUpdateGateway:
    """Applies ResolvedStatus decisions to the remote profile.

    The cache is written only after the remote call succeeded, and before
    apply() returns, so a successful apply always leaves the cache current.
    """

    def __init__(self, client: ProfileClient, cache: StatusCache, token: str):
        self._client = client
        self._cache = cache
        self._token = token

    def apply(self, resolved: ResolvedStatus) -> None:
        """Send resolved unless it is suppressed.

        Raises:
            RemoteError: The profile update failed; the cache is untouched.
            CacheWriteError: The update succeeded but the cache could not be
                written.
        """
        if resolved.suppress_update:
            logger.info("Update suppressed (%s), nothing sent", resolved.reason.value)
            return

        self._client.set_status(
            resolved.status.text,
            resolved.status.emoji,
            resolved.computed_expiration,
            self._token,
        )
        logger.info(
            "Slack status set to %s (expiration %d)",
            resolved.status, resolved.computed_expiration,
        )

        self._cache.save(resolved.to_cached())
