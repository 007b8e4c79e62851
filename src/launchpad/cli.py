"""Launchpad CLI entry point."""

import logging
import subprocess
import threading
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

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


def _load_config(ctx: click.Context) -> Any:
    from launchpad.config import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise SystemExit(1) from e


def _make_handler(ctx: click.Context) -> Any:
    """Create a LauncherHandler for the configured protocol, or exit."""
    from launchpad.protocols import ProtocolNotFoundError
    from launchpad.updater import LauncherHandler

    config = _load_config(ctx)
    try:
        return LauncherHandler(config)
    except ProtocolNotFoundError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        console.print("[dim]Install a package that provides a launchpad.protocols entry point[/dim]")
        raise SystemExit(1) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Path to launchpad.toml")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Launchpad - self-updating game launcher."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    setup_logging(verbose)


# =============================================================================
# Changelog Commands
# =============================================================================


@cli.group()
def changelog() -> None:
    """Inspect the launcher changelog."""
    pass


@changelog.command("check")
@click.pass_context
def changelog_check(ctx: click.Context) -> None:
    """Check if the standard changelog address is reachable."""
    handler = _make_handler(ctx)

    if handler.can_access_standard_changelog():
        console.print(f"[green]✓[/green] Changelog reachable at [cyan]{escape(handler.config.changelog_address)}[/cyan]")
    else:
        console.print("[yellow]→[/yellow] Standard changelog unreachable")
        console.print("\nRun [cyan]launchpad changelog fallback[/cyan] to load it through the patch protocol")
        raise SystemExit(1)


@changelog.command("fallback")
@click.option("--timeout", "-t", default=30.0, help="Seconds to wait for the changelog")
@click.pass_context
def changelog_fallback(ctx: click.Context, timeout: float) -> None:
    """Load the changelog through the patch protocol."""
    from launchpad.domain import ChangelogResult

    handler = _make_handler(ctx)
    finished = threading.Event()
    received: list[ChangelogResult] = []

    def on_finished(sender: Any, result: ChangelogResult) -> None:
        received.append(result)
        finished.set()

    handler.changelog_download_finished.add_callback(on_finished)
    handler.load_fallback_changelog()

    if not finished.wait(timeout):
        console.print("[red]✗[/red] Timed out waiting for the changelog")
        raise SystemExit(1)

    result = received[0]
    if result.is_empty:
        console.print("[yellow]No changelog available from the patch protocol[/yellow]")
        return

    if result.url:
        console.print(f"[dim]{escape(result.url)}[/dim]")
    console.print(result.html, markup=False, highlight=False)


# =============================================================================
# Self-Update Commands
# =============================================================================


@cli.group()
def update() -> None:
    """Manage launcher updates."""
    pass


@update.command("launcher")
@click.option("--timeout", "-t", default=600.0, help="Seconds to wait for the update")
@click.option("--restart", is_flag=True, help="Write and run the update script when done")
@click.pass_context
def update_launcher(ctx: click.Context, timeout: float, restart: bool) -> None:
    """Download the latest launcher through the patch protocol."""
    from launchpad.domain import ModuleInstallationFinished, ModuleProgress

    handler = _make_handler(ctx)
    finished = threading.Event()
    outcome: list[ModuleInstallationFinished] = []

    def on_progress(sender: Any, args: ModuleProgress) -> None:
        label = args.indicator_label or args.kind.value
        console.print(f"  {args.progress_fraction:>4.0%} [dim]{escape(label)}[/dim]")

    def on_finished(sender: Any, args: ModuleInstallationFinished) -> None:
        outcome.append(args)
        finished.set()

    handler.launcher_download_progress_changed.add_callback(on_progress)
    handler.launcher_download_finished.add_callback(on_finished)

    console.print(f"Updating launcher using [cyan]{handler.patch.name}[/cyan]...")
    handler.update_launcher()

    if not finished.wait(timeout):
        console.print("[red]✗[/red] Timed out waiting for the launcher update")
        raise SystemExit(1)

    if not outcome[0].result:
        console.print("[red]✗[/red] Launcher update failed")
        raise SystemExit(1)

    console.print("[green]✓[/green] Launcher files downloaded")

    if restart:
        ctx.invoke(update_script, run=True)
    else:
        console.print("\nTo replace the running launcher, run:")
        console.print("  [cyan]launchpad update script --run[/cyan]")


@update.command("script")
@click.option("--run", is_flag=True, help="Spawn the script after writing it")
@click.pass_context
def update_script(ctx: click.Context, run: bool) -> None:
    """Write the replace-and-relaunch script to the temp directory."""
    from launchpad.updater import UpdateScriptSynthesizer

    descriptor = UpdateScriptSynthesizer(_load_config(ctx)).create_update_script()

    if descriptor is None:
        console.print("[red]✗[/red] Failed to create update script")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Update script written to [dim]{escape(str(descriptor.executable_path))}[/dim]")

    if run:
        console.print("[yellow]Handing off to the update script...[/yellow]")
        try:
            subprocess.Popen(**descriptor.popen_args())
        except OSError as e:
            console.print(f"[red]✗[/red] Could not start update script: {escape(str(e))}")
            raise SystemExit(1) from e


# =============================================================================
# Integrity Commands
# =============================================================================


@cli.command("hash")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--expect", "-e", help="Digest to compare against")
def hash_command(path: str, expect: str | None) -> None:
    """Print the MD5 digest of a file."""
    from launchpad.utils import hash_file

    digest = hash_file(Path(path))
    if digest is None:
        console.print(f"[red]✗[/red] Could not read {escape(path)}")
        raise SystemExit(1)

    console.print(digest)

    if expect is not None:
        if digest == expect.strip().upper():
            console.print("[green]✓[/green] Digest matches")
        else:
            console.print("[red]✗[/red] Digest does not match")
            raise SystemExit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
