"""Typed domain exceptions built from registry codes.

Usage:
    # In service layer
    raise IpLookupError("E-2002", url=url, value=body)

    # In CLI command
    try:
        ip = ip_client.get_public_ip()
    except IpLookupError as e:
        console.print(format_error(e))
        raise typer.Exit(1)
"""

from slack_status.errors.registry import get_error


class SlackStatusError(Exception):
    """Base exception for all slack-status errors.

    Attributes:
        code: Error code in E-XXXX format.
        title: Short title from the registry.
        message: Human-readable message with context substituted.
        remediation: Action the user should take.
        context: Values used to format the message template.
    """

    def __init__(self, code: str, **context: object) -> None:
        error_def = get_error(code)
        self.code = code
        self.context = context
        if error_def is None:
            self.title = "Unknown Error"
            self.message = f"Unknown error: {code}"
            self.remediation = "Re-run with -vvv and report the output."
        else:
            self.title = error_def.title
            try:
                self.message = error_def.message_template.format(**context)
                self.remediation = error_def.remediation.format(**context)
            except KeyError:
                # Keep templates if some placeholders are missing
                self.message = error_def.message_template
                self.remediation = error_def.remediation
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigurationError(SlackStatusError):
    """Missing or invalid configuration (E-1xxx)."""


class IpLookupError(SlackStatusError):
    """The public IP could not be determined (E-2xxx)."""


class CacheReadError(SlackStatusError):
    """The persisted status cache is unreadable or corrupt."""


class CacheWriteError(SlackStatusError):
    """The status cache could not be written or removed."""


class RemoteError(SlackStatusError):
    """A Slack profile call failed at the network or API level (E-4xxx)."""
