"""Token redaction for logs and terminal output.

Slack tokens grant write access to the user's profile, so they must never
reach a log line or an error message verbatim.
"""

import re

_SENSITIVE_PATTERNS = frozenset({"token", "secret", "authorization", "password"})

_REDACTED = "***REDACTED***"

# xoxp-, xoxb-, xoxe- ... style Slack tokens and bearer headers.
_TOKEN_VALUE_PATTERN = re.compile(
    r"(?i)(?:Bearer\s+\S+|xox[a-z]-[A-Za-z0-9-]+)"
)


def redact_for_logging(
    obj: dict,
    sensitive_patterns: frozenset[str] = _SENSITIVE_PATTERNS,
) -> dict:
    """Return a copy of obj with sensitive values replaced.

    Keys are matched case-insensitively by substring. Nested dicts and
    lists of dicts are handled recursively.
    """
    result = {}
    for key, value in obj.items():
        key_lower = key.lower()
        if any(pattern in key_lower for pattern in sensitive_patterns):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = redact_for_logging(value, sensitive_patterns)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item, sensitive_patterns) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def mask_token(token: str) -> str:
    """Mask a token for display, keeping only the last four characters."""
    if len(token) <= 8:
        return "***"
    return "***" + token[-4:]


def sanitize_error_message(msg: str | None, max_length: int = 500) -> str | None:
    """Strip token-looking values from a free-text message and truncate it."""
    if msg is None:
        return None
    sanitized = _TOKEN_VALUE_PATTERN.sub(_REDACTED, msg)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length - 3] + "..."
    return sanitized
