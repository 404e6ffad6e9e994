"""Status resolution: decide which status to show and whether to send it.

Rules are applied in priority order:
1. A manual override is always sent as-is and marks the cache manual.
2. A still-valid manual status in the cache blocks automatic updates.
3. An ignored public IP (VPN exit...) blocks automatic updates.
4. The location matching the public IP, else the default policy.

Cache read errors never fail resolution: they are logged, recorded as
warnings, and resolution carries on as if there were no cache.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address

from slack_status.config import SlackStatusConfig, StatusTemplate
from slack_status.errors import CacheReadError, ConfigurationError
from slack_status.services.defaults import resolve_default
from slack_status.services.locations import LocationTable
from slack_status.services.status_cache import CachedStatus, StatusCache

logger = logging.getLogger(__name__)


class ResolutionReason(str, Enum):
    """Why a resolution came out the way it did."""

    NO_CACHE_CONFLICT = "no_cache_conflict"
    MANUAL_HOLD_ACTIVE = "manual_hold_active"
    IGNORED_IP = "ignored_ip"


@dataclass
class ResolvedStatus:
    """Decision for one run.

    Attributes:
        status: Status to show (the cached one when the update is suppressed).
        computed_expiration: Unix timestamp to send, 0 for never.
        suppress_update: True when no update may be sent.
        reason: Why the update is or isn't suppressed.
        manual: True when the status comes from a manual override.
        warnings: Non-fatal problems met while resolving.
    """

    status: StatusTemplate
    computed_expiration: int
    suppress_update: bool = False
    reason: ResolutionReason = ResolutionReason.NO_CACHE_CONFLICT
    manual: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_cached(self) -> CachedStatus:
        """The cache entry to persist once this status has been applied."""
        return CachedStatus(
            text=self.status.text,
            emoji=self.status.emoji,
            expiration=self.computed_expiration,
            manually_set=self.manual,
        )


def now_timestamp() -> int:
    """Current time as whole-second Unix epoch."""
    return int(time.time())


def _read_cache(cache: StatusCache, warnings: list[str]) -> CachedStatus | None:
    try:
        return cache.load()
    except CacheReadError as e:
        logger.warning("Ignoring status cache: %s", e)
        warnings.append(str(e))
        return None


def resolve(
    current_ip: IPv4Address | IPv6Address | None,
    config: SlackStatusConfig,
    cache: StatusCache,
    manual_override: StatusTemplate | None = None,
    now: int | None = None,
) -> ResolvedStatus:
    """Resolve the status to show for current_ip.

    Args:
        current_ip: The public IP address of this machine. May be None
            only when manual_override is given.
        config: Loaded configuration (locations, defaults, ignored IPs).
        cache: Status cache; only read here.
        manual_override: Status explicitly chosen by the user.
        now: Current Unix time, defaults to the system clock.

    Returns:
        The ResolvedStatus decision.
    """
    now = now_timestamp() if now is None else now

    if manual_override is not None:
        logger.info("Manual status requested: %s", manual_override)
        return ResolvedStatus(
            status=manual_override,
            computed_expiration=manual_override.expiration_from(now),
            manual=True,
        )

    if current_ip is None:
        raise ValueError("current_ip is required for automatic resolution")

    warnings: list[str] = []
    cached = _read_cache(cache, warnings)

    if cached is not None and cached.hold.is_active(now):
        logger.info("Manual status '%s' still active, skipping automatic update", cached)
        return ResolvedStatus(
            status=cached.to_template(),
            computed_expiration=cached.expiration,
            suppress_update=True,
            reason=ResolutionReason.MANUAL_HOLD_ACTIVE,
            warnings=warnings,
        )

    if config.is_ignored(current_ip):
        logger.info("Public IP %s is ignored, keeping current status", current_ip)
        if cached is not None:
            status, expiration = cached.to_template(), cached.expiration
        else:
            status = resolve_default(config)
            expiration = status.expiration_from(now)
        return ResolvedStatus(
            status=status,
            computed_expiration=expiration,
            suppress_update=True,
            reason=ResolutionReason.IGNORED_IP,
            warnings=warnings,
        )

    lookup = LocationTable(config.locations).find(current_ip)
    if lookup.conflict:
        warnings.append(str(ConfigurationError("E-1004", ip=current_ip, count=len(lookup.matches))))

    status = lookup.status if lookup.matched else resolve_default(config)
    logger.info("Status is: %s", status)
    return ResolvedStatus(
        status=status,
        computed_expiration=status.expiration_from(now),
        warnings=warnings,
    )
