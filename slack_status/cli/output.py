"""CLI output formatters for Rich tables and JSON.

Provides human-readable Rich output (default) and machine-parseable
JSON output (--json flag). All formatting goes through these functions
so the CLI commands stay clean.
"""

import dataclasses
import json
import time
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from slack_status.config import Location
from slack_status.services.protocol import RemoteStatus
from slack_status.services.resolver import ResolutionReason, ResolvedStatus
from slack_status.services.status_cache import CachedStatus

# Slack emoji codes are shown as typed, not rendered by Rich.
console = Console(emoji=False)

REASON_LABELS = {
    ResolutionReason.NO_CACHE_CONFLICT: "from location",
    ResolutionReason.MANUAL_HOLD_ACTIVE: "manual status still active",
    ResolutionReason.IGNORED_IP: "public IP is ignored",
}


def format_expiration(expiration: int, now: int | None = None) -> str:
    """Format a Unix expiration timestamp.

    Args:
        expiration: Unix timestamp, 0 for never.
        now: Reference time, defaults to the system clock.

    Returns:
        "never", or the local date/time with the remaining time or "expired".
    """
    if expiration == 0:
        return "never"
    now = int(time.time()) if now is None else now
    when = datetime.fromtimestamp(expiration).strftime("%Y-%m-%d %H:%M")
    remaining = expiration - now
    if remaining <= 0:
        return f"{when} (expired)"
    hours, rest = divmod(remaining, 3600)
    minutes = rest // 60
    if hours:
        return f"{when} (in {hours}h{minutes:02d})"
    return f"{when} (in {minutes}min)"


def format_locations_table(locations: list[Location], as_json: bool = False) -> str:
    """Format configured locations as a Rich table or JSON.

    IPs configured more than once are flagged, since they never match.
    """
    if as_json:
        return json.dumps(
            [
                {
                    "ip_addresses": [str(a) for a in loc.addresses],
                    "text": loc.text,
                    "emoji": loc.emoji,
                    "expire_after_hours": loc.expire_after_hours,
                }
                for loc in locations
            ],
            indent=2,
        )

    if not locations:
        return "No locations configured."

    counts: dict[str, int] = {}
    for loc in locations:
        for address in loc.addresses:
            counts[str(address)] = counts.get(str(address), 0) + 1

    table = Table(title="Locations")
    table.add_column("IP", style="cyan", no_wrap=True)
    table.add_column("Emoji")
    table.add_column("Text")
    table.add_column("Expires after", justify="right")

    for loc in locations:
        cells = []
        for address in map(str, loc.addresses):
            if counts[address] > 1:
                address = f"[red]{address} (duplicate)[/red]"
            cells.append(address)
        table.add_row(
            "\n".join(cells),
            escape(loc.emoji),
            escape(loc.text),
            "never" if loc.expire_after_hours is None else f"{loc.expire_after_hours}h",
        )

    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_resolution(resolved: ResolvedStatus, now: int | None = None) -> str:
    """Format a resolution decision as a single line."""
    label = REASON_LABELS[resolved.reason]
    if resolved.manual:
        label = "manual"
    line = (
        f"{escape(resolved.status.emoji)} {escape(resolved.status.text)}"
        f"  (expires: {format_expiration(resolved.computed_expiration, now)}, {label})"
    )
    if resolved.suppress_update:
        line += " - not updating"
    return line


def format_remote_status(status: RemoteStatus | None, as_json: bool = False) -> str:
    """Format the status currently shown on Slack."""
    if as_json:
        return json.dumps(dataclasses.asdict(status) if status else None, indent=2)

    if status is None:
        content = "[dim]No status set[/dim]"
    else:
        content = (
            f"[bold]Status:[/bold]   {escape(status.emoji)} {escape(status.text)}\n"
            f"[bold]Expires:[/bold]  {format_expiration(status.expiration)}"
        )
    with console.capture() as capture:
        console.print(Panel(content, title="Slack Status", border_style="cyan"))
    return capture.get()


def format_cached_status(cached: CachedStatus | None, as_json: bool = False) -> str:
    """Format the cached status with its hold state."""
    if as_json:
        return json.dumps(cached.model_dump() if cached else None, indent=2)

    if cached is None:
        content = "[dim]Cache is empty[/dim]"
    else:
        hold = cached.hold
        active = hold.is_active(int(time.time()))
        mode = "manual" if cached.manually_set else "automatic"
        if cached.manually_set:
            mode += " (blocking automatic updates)" if active else " (lapsed)"
        content = (
            f"[bold]Status:[/bold]   {escape(cached.emoji)} {escape(cached.text)}\n"
            f"[bold]Expires:[/bold]  {format_expiration(cached.expiration)}\n"
            f"[bold]Set:[/bold]      {mode}"
        )
    with console.capture() as capture:
        console.print(Panel(content, title="Cached Status", border_style="dim"))
    return capture.get()
