"""Client factories for the remote collaborators.

CLI commands never instantiate concrete clients directly, so tests can
swap in fakes by patching these functions.
"""

from slack_status.config import SlackStatusConfig
from slack_status.services.public_ip import PublicIpClient
from slack_status.services.slack_client import SlackProfileClient


def get_profile_client() -> SlackProfileClient:
    """Create the Slack profile client (usable as a context manager)."""
    return SlackProfileClient()


def get_ip_source(config: SlackStatusConfig) -> PublicIpClient:
    """Create the public IP client, honouring ip_request_address."""
    return PublicIpClient(url=config.ip_request_address)
