"""Interfaces of the remote collaborators and their data models.

The gateway and the CLI talk to these protocols; SlackProfileClient and
PublicIpClient are the production implementations, tests use fakes.
"""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Protocol


@dataclass
class RemoteStatus:
    """Status currently shown on the Slack profile."""

    text: str
    emoji: str
    expiration: int

    @classmethod
    def from_api(cls, profile: dict) -> "RemoteStatus | None":
        """Construct from a users.profile.get profile, None when no status is set."""
        text = profile.get("status_text") or ""
        emoji = profile.get("status_emoji") or ""
        if not text and not emoji:
            return None
        return cls(
            text=text,
            emoji=emoji,
            expiration=int(profile.get("status_expiration") or 0),
        )


class ProfileClient(Protocol):
    """Remote profile API able to read and write the user's status."""

    def set_status(self, text: str, emoji: str, expiration: int, token: str) -> None:
        """Set the status; raises RemoteError on failure."""
        ...

    def get_status(self, token: str) -> RemoteStatus | None:
        """Return the current status, None if unset; raises RemoteError on failure."""
        ...


class PublicIpSource(Protocol):
    """Service returning this machine's public IP address."""

    def get_public_ip(self) -> IPv4Address | IPv6Address:
        """Return the public IP; raises IpLookupError on failure."""
        ...
