"""slack-status CLI: set your Slack status from your current location.

Usage:
    slack-status                      Update status from the current public IP
    slack-status location list        List configured locations
    slack-status location add         Map the current public IP to a status
    slack-status status set TEXT EMOJI
                                      Set a status by hand
    slack-status cache reset          Forget the last status sent
"""

import logging
import sys
from ipaddress import ip_address
from typing import Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Confirm

from slack_status.cli.factory import get_ip_source, get_profile_client
from slack_status.cli.output import (
    console,
    format_cached_status,
    format_locations_table,
    format_remote_status,
    format_resolution,
)
from slack_status.config import (
    Location,
    SlackStatusConfig,
    StatusTemplate,
    create_default_config,
    find_config_file,
    load_config,
    save_locations,
)
from slack_status.errors import (
    CacheWriteError,
    ConfigurationError,
    SlackStatusError,
    format_error,
    format_warnings,
)
from slack_status.services.gateway import ProfileUpdateGateway
from slack_status.services.locations import LocationTable
from slack_status.services.resolver import ResolvedStatus, resolve
from slack_status.services.status_cache import StatusCache
from slack_status.utils.paths import AppPaths
from slack_status.utils.redaction import mask_token

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="slack-status",
    help="Set your Slack status from your current location",
)
location_app = typer.Typer(help="Manage IP to status mappings")
status_app = typer.Typer(help="Read or set the Slack status by hand")
cache_app = typer.Typer(help="Inspect or reset the last status sent")
config_app = typer.Typer(help="Configuration management")

app.add_typer(location_app, name="location")
app.add_typer(status_app, name="status")
app.add_typer(cache_app, name="cache")
app.add_typer(config_app, name="config")

# --- Global state ---
_config_path: str | None = None
_assume_yes: bool = False

_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}


def configure_logging(verbosity: int) -> None:
    """Map -v occurrences to a log level: none=ERROR ... -vvv=DEBUG."""
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbosity, logging.DEBUG),
        format="%(levelname)s:%(name)s:%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _get_paths() -> AppPaths:
    return AppPaths.default()


def _fail(error: SlackStatusError) -> None:
    """Print a formatted error and exit with status 1."""
    console.print(f"[red]{escape(format_error(error))}[/red]")
    raise typer.Exit(1)


def _print_warnings(warnings: list[str]) -> None:
    if warnings:
        console.print(escape(format_warnings(warnings)), style="yellow")


def _require_config() -> SlackStatusConfig:
    """Load the configuration, creating a sample one on first run."""
    try:
        cfg = load_config(config_path=_config_path, paths=_get_paths())
    except ConfigurationError as e:
        _fail(e)

    if cfg is None:
        path = find_config_file(None, _get_paths())
        create_default_config(path)
        console.print("[yellow]Configuration file not found![/yellow]")
        console.print(f"Sample configuration file created at: {path}")
        console.print("Please edit it and add your Slack token.")
        raise typer.Exit(1)
    return cfg


def _require_token(cfg: SlackStatusConfig) -> str:
    try:
        return cfg.require_token()
    except ConfigurationError as e:
        _fail(e)


def _apply(gateway: ProfileUpdateGateway, resolved: ResolvedStatus) -> None:
    """Apply a resolution, reporting remote and cache outcomes separately."""
    try:
        gateway.apply(resolved)
    except CacheWriteError as e:
        console.print("[green]Slack status updated.[/green]")
        _fail(e)
    except SlackStatusError as e:
        _fail(e)
    console.print("[green]Slack status updated.[/green]")


def _save_locations(locations: list[Location]) -> None:
    try:
        save_locations(find_config_file(_config_path, _get_paths()), locations)
    except ConfigurationError as e:
        _fail(e)


def _parse_ip(value: str):
    try:
        return ip_address(value.strip())
    except ValueError:
        console.print(f"[red]Not an IP address:[/red] {escape(value)}")
        raise typer.Exit(1)


def _run_update() -> None:
    """Resolve the status for the current public IP and send it."""
    cfg = _require_config()
    token = _require_token(cfg)
    cache = StatusCache(_get_paths())

    try:
        ip = get_ip_source(cfg).get_public_ip()
    except SlackStatusError as e:
        _fail(e)
    console.print(f"Public IP: [cyan]{ip}[/cyan]")

    resolved = resolve(ip, cfg, cache)
    _log.debug("Resolved: %s", resolved)
    _print_warnings(resolved.warnings)
    console.print(format_resolution(resolved))

    if resolved.suppress_update:
        return

    if not _assume_yes and not Confirm.ask("Update Slack status?", console=console):
        console.print("[dim]Cancelled[/dim]")
        return

    with get_profile_client() as client:
        _apply(ProfileUpdateGateway(client, cache, token), resolved)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to slack-status YAML config file"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv, -vvv)"
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Do not ask for confirmation before updating"
    ),
):
    """Set your Slack status from your current location.

    Without a command, updates the status from the current public IP.
    """
    global _config_path, _assume_yes
    _config_path = config
    _assume_yes = yes
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        _run_update()


@app.command()
def update():
    """Update the status from the current public IP (default command)."""
    _run_update()


@app.command()
def version():
    """Show slack-status version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version
    try:
        v = pkg_version("slack-status")
    except PackageNotFoundError:
        v = "unknown"
    console.print(f"[bold]slack-status[/bold] v{v}")


# --- Location commands ---


@location_app.command("list")
def location_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List configured locations."""
    cfg = _require_config()
    if json_output:
        console.print(
            format_locations_table(cfg.locations, as_json=True), markup=False, soft_wrap=True,
        )
        return
    console.print(format_locations_table(cfg.locations), markup=False)
    for ip in LocationTable(cfg.locations).duplicate_ips():
        _print_warnings([str(ConfigurationError("E-1004", ip=ip, count="several"))])


@location_app.command("add")
def location_add(
    text: str = typer.Option(..., "--text", "-t", prompt="Status text", help="Status text"),
    emoji: str = typer.Option(
        ..., "--emoji", "-e", prompt="Status emoji (e.g. :house:)", help="Status emoji"
    ),
    ip: Optional[str] = typer.Option(
        None, "--ip", help="IP address (defaults to the current public IP)"
    ),
    expire_after_hours: Optional[int] = typer.Option(
        None, "--expire-after-hours", min=0, help="Hours before the status expires"
    ),
):
    """Map an IP address (default: the current public IP) to a status."""
    cfg = _require_config()

    if ip is None:
        try:
            address = get_ip_source(cfg).get_public_ip()
        except SlackStatusError as e:
            _fail(e)
    else:
        address = _parse_ip(ip)

    if any(loc.matches(address) for loc in cfg.locations):
        _fail(ConfigurationError("E-1006", ip=address))

    try:
        location = Location(
            ip=address, text=text, emoji=emoji, expire_after_hours=expire_after_hours,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid location:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _save_locations([*cfg.locations, location])
    console.print(f"[green]Added location[/green] {escape(str(location))}")


@location_app.command("remove")
def location_remove(
    ip: str = typer.Argument(help="IP address of the location to remove"),
):
    """Remove an IP address from every location listing it.

    Locations left without any address are deleted.
    """
    cfg = _require_config()
    address = _parse_ip(ip)

    touched = [loc for loc in cfg.locations if loc.matches(address)]
    if not touched:
        _fail(ConfigurationError("E-1005", ip=address))

    remaining = []
    for loc in cfg.locations:
        kept = loc.without(address) if loc.matches(address) else loc
        if kept is not None:
            remaining.append(kept)

    _save_locations(remaining)
    deleted = len(cfg.locations) - len(remaining)
    console.print(
        f"[green]Removed {address} from {len(touched)} location(s)"
        f" ({deleted} deleted)[/green]"
    )


# --- Status commands ---


@status_app.command("get")
def status_get(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the status currently set on Slack."""
    cfg = _require_config()
    token = _require_token(cfg)

    with get_profile_client() as client:
        try:
            remote = client.get_status(token)
        except SlackStatusError as e:
            _fail(e)

    if json_output:
        console.print(
            format_remote_status(remote, as_json=True), markup=False, soft_wrap=True,
        )
    else:
        console.print(format_remote_status(remote), markup=False)


@status_app.command("set")
def status_set(
    text: str = typer.Argument(help="Status text"),
    emoji: str = typer.Argument(help="Status emoji, e.g. :palm_tree:"),
    expire_after_hours: Optional[int] = typer.Option(
        None, "--expire-after-hours", "-x", min=0,
        help="Hours before the status expires (default: never)",
    ),
):
    """Set a status by hand.

    A manual status blocks automatic updates until it expires, another
    status is set by hand, or the cache is reset.
    """
    cfg = _require_config()
    token = _require_token(cfg)
    cache = StatusCache(_get_paths())

    override = StatusTemplate(text=text, emoji=emoji, expire_after_hours=expire_after_hours)
    resolved = resolve(None, cfg, cache, manual_override=override)
    console.print(format_resolution(resolved))

    with get_profile_client() as client:
        _apply(ProfileUpdateGateway(client, cache, token), resolved)


# --- Cache commands ---


@cache_app.command("show")
def cache_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the last status sent and whether it was set by hand."""
    cache = StatusCache(_get_paths())
    try:
        cached = cache.load()
    except SlackStatusError as e:
        _fail(e)

    if json_output:
        console.print(
            format_cached_status(cached, as_json=True), markup=False, soft_wrap=True,
        )
    else:
        console.print(format_cached_status(cached), markup=False)


@cache_app.command("reset")
def cache_reset():
    """Forget the last status sent, lifting any manual hold."""
    cache = StatusCache(_get_paths())
    try:
        cache.reset()
    except SlackStatusError as e:
        _fail(e)
    console.print("[green]Status cache reset.[/green]")


# --- Config commands ---


@config_app.command("show")
def config_show():
    """Display resolved configuration (token masked)."""
    cfg = _require_config()

    console.print(f"[bold]Config file:[/bold] {find_config_file(_config_path, _get_paths())}")
    console.print(f"  token: {mask_token(cfg.token)}")
    console.print(f"  ip_request_address: {cfg.ip_request_address or '(default)'}")
    console.print(f"  locations: {len(cfg.locations)}")
    if cfg.ignore_ips:
        console.print(f"  ignore_ips: {', '.join(str(ip) for ip in cfg.ignore_ips)}")
    if cfg.defaults:
        console.print(f"  defaults: {escape(str(cfg.defaults))}")


@config_app.command("validate")
def config_validate():
    """Validate the config file without contacting any service."""
    try:
        cfg = load_config(config_path=_config_path, paths=_get_paths())
    except ConfigurationError as e:
        _fail(e)
    if cfg is None:
        console.print("[red]No config file found.[/red]")
        raise typer.Exit(1)
    try:
        cfg.require_token()
    except ConfigurationError as e:
        _fail(e)

    console.print("[green]Config is valid.[/green]")
    console.print(f"  Locations: {len(cfg.locations)}")
    _print_warnings([
        str(ConfigurationError("E-1004", ip=ip, count="several"))
        for ip in LocationTable(cfg.locations).duplicate_ips()
    ])


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a sample configuration file."""
    path = find_config_file(_config_path, _get_paths())
    if path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {path}")
        raise typer.Exit(1)
    create_default_config(path)
    console.print(f"[green]Sample configuration written to[/green] {path}")
