"""Service layer for slack-status.

Provides status resolution, the status cache, and the clients for the
remote collaborators (Slack profile API, public IP service).
"""

from slack_status.services.defaults import FALLBACK_STATUS, resolve_default
from slack_status.services.gateway import ProfileUpdateGateway
from slack_status.services.locations import LocationTable, LookupResult
from slack_status.services.resolver import ResolutionReason, ResolvedStatus, resolve
from slack_status.services.status_cache import (
    Automatic,
    CachedStatus,
    HoldState,
    ManualHold,
    StatusCache,
)

__all__ = [
    "FALLBACK_STATUS",
    "resolve_default",
    "LocationTable",
    "LookupResult",
    "ResolutionReason",
    "ResolvedStatus",
    "resolve",
    "Automatic",
    "CachedStatus",
    "HoldState",
    "ManualHold",
    "StatusCache",
    "ProfileUpdateGateway",
]
