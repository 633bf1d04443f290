"""autoupgrade CLI entry point."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """autoupgrade - self-update handoff tooling."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument("payload")
def inspect(payload: str) -> None:
    """Decode an updater handoff argument and show its contents."""
    from autoupgrade.errors import EnvelopeDecodeError
    from autoupgrade.handoff import decode_envelope

    try:
        envelope = decode_envelope(payload)
    except EnvelopeDecodeError as e:
        console.print(f"[red]✗[/red] Invalid payload: {escape(str(e))}")
        raise SystemExit(1) from e

    table = Table(title="Handoff envelope")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("schema", escape(str(envelope.schema_version)))
    table.add_row("managed executable", escape(envelope.managed_executable))
    table.add_row("interpreter", escape(envelope.interpreter or "-"))
    table.add_row("arguments", escape(envelope.managed_arguments or "-"))
    table.add_row("target folder", escape(envelope.config.target_folder or "-"))
    table.add_row("current version", escape(envelope.config.current_version))
    table.add_row("feed", escape(envelope.config.feed_url or "-"))
    table.add_row("channel", escape(envelope.config.channel))

    console.print(table)


@cli.command()
@click.option("--executable", "-e", required=True, type=click.Path(), help="Managed executable path")
@click.option("--target-folder", "-t", default="", help="Installation folder")
@click.option("--version", "current_version", default="0.0.0", help="Installed version")
@click.option("--feed-url", help="Release feed URL")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def encode(
    executable: str,
    target_folder: str,
    current_version: str,
    feed_url: str | None,
    args: tuple[str, ...],
) -> None:
    """Build an updater handoff argument (for scripting and manual tests)."""
    from pathlib import Path

    from autoupgrade.domain import HandoffEnvelope, UpgradeConfiguration
    from autoupgrade.handoff import encode_envelope
    from autoupgrade.updater import resolve_target_folder

    managed = str(Path(executable).resolve())
    config = UpgradeConfiguration(
        target_folder=target_folder,
        current_version=current_version,
        feed_url=feed_url,
    )
    resolve_target_folder(config, managed)

    envelope = HandoffEnvelope.capture(config, managed_executable=managed, arguments=list(args))
    click.echo(encode_envelope(envelope))


@cli.command("guard-status")
def guard_status() -> None:
    """Show whether an updater currently holds the guard."""
    from autoupgrade.guard import SingleInstanceGuard, is_guard_held

    guard = SingleInstanceGuard()
    if is_guard_held(guard):
        pid = guard.owner_pid()
        owner = f" (pid {pid})" if pid else ""
        console.print(f"[yellow]→[/yellow] An updater is running{owner}")
    else:
        guard.release()
        console.print("[green]✓[/green] No updater is running")
    console.print(f"  Lock file: [dim]{guard.path}[/dim]")


@cli.command()
@click.option("--feed-url", required=True, help="Release feed URL")
@click.option("--version", "current_version", required=True, help="Installed version")
@click.option("--prerelease", is_flag=True, help="Accept prereleases")
def check(feed_url: str, current_version: str, prerelease: bool) -> None:
    """Check a release feed for a newer version."""
    from autoupgrade.capability import ReleaseFeedCapability
    from autoupgrade.domain import UpgradeConfiguration

    config = UpgradeConfiguration(
        current_version=current_version,
        feed_url=feed_url,
        allow_prerelease=prerelease,
    )
    capability = ReleaseFeedCapability(config)

    if capability.detect_new_version():
        console.print(f"[yellow]→[/yellow] Update available: {current_version} → {capability.latest_version}")
    else:
        console.print(f"[green]✓[/green] Up to date ({current_version})")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
