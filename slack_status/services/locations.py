"""Location table lookup: exact public-IP match against configured locations."""

import logging
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address

from slack_status.config import Location, StatusTemplate

logger = logging.getLogger(__name__)


@dataclass
class LookupResult:
    """Outcome of a location lookup.

    status is set only when exactly one location matches. A conflict means
    the IP is configured more than once; no status is returned in that case.
    """

    status: StatusTemplate | None = None
    matches: list[Location] = field(default_factory=list)

    @property
    def conflict(self) -> bool:
        return len(self.matches) > 1

    @property
    def matched(self) -> bool:
        return self.status is not None


class LocationTable:
    """Read-only view over the configured locations."""

    def __init__(self, locations: list[Location]):
        self._locations = list(locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self):
        return iter(self._locations)

    def find(self, ip: IPv4Address | IPv6Address) -> LookupResult:
        """Return the status configured for ip.

        A location matches when ip is one of its addresses. Matching is exact
        equality; there is no prefix or range matching.
        Two or more matches are a configuration error: nothing is picked and
        a warning is logged.
        """
        matches = [loc for loc in self._locations if loc.matches(ip)]

        if not matches:
            logger.info("No location configured for %s", ip)
            return LookupResult()

        if len(matches) > 1:
            logger.warning(
                "IP %s is configured for %d locations (%s); ignoring all of them",
                ip, len(matches), ", ".join(m.text for m in matches),
            )
            return LookupResult(matches=matches)

        location = matches[0]
        logger.info("%s", location)
        return LookupResult(status=location.status, matches=matches)

    def duplicate_ips(self) -> list[IPv4Address | IPv6Address]:
        """Return every IP configured for more than one location."""
        seen: set = set()
        duplicates = []
        for loc in self._locations:
            for address in loc.addresses:
                if address in seen and address not in duplicates:
                    duplicates.append(address)
                seen.add(address)
        return duplicates
