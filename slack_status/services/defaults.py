"""Default status policy used when the current IP matches no location."""

from slack_status.config import SlackStatusConfig, StatusTemplate

FALLBACK_STATUS = StatusTemplate(
    text="commuting",
    emoji=":mountain_railway:",
    expire_after_hours=1,
)


def resolve_default(config: SlackStatusConfig) -> StatusTemplate:
    """Return the user-configured default status, or the built-in fallback."""
    if config.defaults is not None:
        return config.defaults
    return FALLBACK_STATUS.model_copy()
