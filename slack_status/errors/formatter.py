"""Error formatting for terminal display."""

from slack_status.errors.domain import SlackStatusError


def format_error(error: SlackStatusError, include_remediation: bool = True) -> str:
    """Format error for display to user.

    Args:
        error: The SlackStatusError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string suitable for user display.
    """
    lines = [f"{error.code} {error.title}: {error.message}"]
    if include_remediation:
        lines.append(f"  Action: {error.remediation}")
    return "\n".join(lines)


def format_warnings(warnings: list[str]) -> str:
    """Format non-fatal warnings collected during a run, one per line."""
    if not warnings:
        return ""
    return "\n".join(f"Warning: {w}" for w in warnings)
