"""Public IP lookup over HTTP."""

import ipaddress
import logging
from ipaddress import IPv4Address, IPv6Address

import httpx

from slack_status.errors import IpLookupError

logger = logging.getLogger(__name__)

DEFAULT_IP_REQUEST_ADDRESS = "https://api.ipify.org"


class PublicIpClient:
    """PublicIpSource asking a "what is my IP" service.

    The service must answer with the bare address as text, or with a JSON
    object carrying it under "ip".
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url or DEFAULT_IP_REQUEST_ADDRESS
        self._timeout = timeout
        self._transport = transport

    def get_public_ip(self) -> IPv4Address | IPv6Address:
        """Return the public IP address.

        Raises:
            IpLookupError: The service is unreachable or its answer is not an IP.
        """
        logger.info("Requesting public ip from %s", self.url)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.get(self.url)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise IpLookupError("E-2001", url=self.url, detail=f"{type(e).__name__}: {e}") from e

        value = resp.text.strip()
        if value.startswith("{"):
            try:
                value = str(resp.json().get("ip", "")).strip()
            except ValueError:
                pass

        try:
            ip = ipaddress.ip_address(value)
        except ValueError as e:
            raise IpLookupError("E-2002", url=self.url, value=value[:64]) from e

        logger.info("Public IP is: %s", ip)
        return ip
