"""Error code registry with E-XXXX format codes.

This module defines the error code system for slack-status, organizing errors
into categories:
- E-1xxx: Configuration errors
- E-2xxx: Public IP lookup errors
- E-3xxx: Status cache errors
- E-4xxx: Slack API errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    CONFIG = "config"  # E-1xxx
    IP_LOOKUP = "ip_lookup"  # E-2xxx
    CACHE = "cache"  # E-3xxx
    SLACK_API = "slack_api"  # E-4xxx


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action user should take to resolve.
        is_fatal: Whether the error aborts the run.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_fatal: bool = True


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Configuration errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.CONFIG,
        title="Configuration Not Found",
        message_template="No configuration file found at {path}.",
        remediation="Run 'slack-status config init' and add your Slack token.",
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.CONFIG,
        title="Invalid Configuration",
        message_template="Configuration file {path} is invalid: {detail}",
        remediation="Fix the reported field in the configuration file and retry.",
    ),
    "E-1003": ErrorCode(
        code="E-1003",
        category=ErrorCategory.CONFIG,
        title="Missing Slack Token",
        message_template="The 'token' field is missing or still set to the sample value.",
        remediation="Set a Slack token with users.profile:write scope in the configuration "
        "file or in SLACK_STATUS_TOKEN.",
    ),
    "E-1004": ErrorCode(
        code="E-1004",
        category=ErrorCategory.CONFIG,
        title="Duplicate Location IP",
        message_template="IP {ip} is configured for {count} locations; ignoring all of them.",
        remediation="Keep a single location entry per IP address.",
        is_fatal=False,
    ),
    "E-1005": ErrorCode(
        code="E-1005",
        category=ErrorCategory.CONFIG,
        title="Location Not Found",
        message_template="No location is configured for IP {ip}.",
        remediation="Run 'slack-status location list' to see configured locations.",
    ),
    "E-1006": ErrorCode(
        code="E-1006",
        category=ErrorCategory.CONFIG,
        title="Location Already Exists",
        message_template="A location is already configured for IP {ip}.",
        remediation="Remove the existing location first with 'slack-status location remove {ip}'.",
    ),
    "E-1007": ErrorCode(
        code="E-1007",
        category=ErrorCategory.CONFIG,
        title="Configuration Write Failed",
        message_template="Cannot write configuration file {path}: {detail}",
        remediation="Check permissions on the configuration file and its directory.",
    ),
    # Public IP lookup errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.IP_LOOKUP,
        title="Public IP Lookup Failed",
        message_template="Could not reach {url}: {detail}",
        remediation="Check your network connection or set ip_request_address to another service.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.IP_LOOKUP,
        title="Unparseable Public IP",
        message_template="{url} returned '{value}', which is not an IP address.",
        remediation="Point ip_request_address at a service that returns the bare IP as text.",
    ),
    # Cache errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.CACHE,
        title="Status Cache Unreadable",
        message_template="Cannot read status cache {path}: {detail}",
        remediation="Run 'slack-status cache reset' to discard the cached status.",
        is_fatal=False,
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.CACHE,
        title="Status Cache Write Failed",
        message_template="Cannot write status cache {path}: {detail}",
        remediation="Check permissions on the cache directory. The next run may use a stale "
        "cached status until the cache is written or reset.",
    ),
    # Slack API errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SLACK_API,
        title="Slack Request Failed",
        message_template="Request to Slack {method} failed: {detail}",
        remediation="Check your network connection and retry.",
    ),
    "E-4002": ErrorCode(
        code="E-4002",
        category=ErrorCategory.SLACK_API,
        title="Slack API Error",
        message_template="Slack {method} returned error '{error}'.",
        remediation="See https://api.slack.com/methods/{method} for the meaning of this error.",
    ),
    "E-4003": ErrorCode(
        code="E-4003",
        category=ErrorCategory.SLACK_API,
        title="Slack Authentication Failed",
        message_template="Slack rejected the token ({error}).",
        remediation="Generate a new token with users.profile:read and users.profile:write scopes.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category."""
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
