"""Error handling framework for slack-status.

This package provides:
- Error code registry with E-XXXX format codes
- Typed exceptions raised by the services and the CLI
- Error formatting for terminal display

Error categories:
- E-1xxx: Configuration errors
- E-2xxx: Public IP lookup errors
- E-3xxx: Status cache errors
- E-4xxx: Slack API errors
"""

from slack_status.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)
from slack_status.errors.domain import (
    CacheReadError,
    CacheWriteError,
    ConfigurationError,
    IpLookupError,
    RemoteError,
    SlackStatusError,
)
from slack_status.errors.formatter import format_error, format_warnings

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Exceptions
    "SlackStatusError",
    "ConfigurationError",
    "IpLookupError",
    "CacheReadError",
    "CacheWriteError",
    "RemoteError",
    # Formatter
    "format_error",
    "format_warnings",
]
