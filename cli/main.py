"""SWT-OS CLI - prints the detected native and running platforms."""
import logging
import sys
from typing import List

import typer
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler

from swtos_core.detection import get_detector
from swtos_core.exceptions import SwtOsError
from swtos_core.platform import PlatformIdentity, SwtPlatform, os_dot_arch

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True, show_path=False)]
)
logger = logging.getLogger("swtos")

# Rich console for pretty output
console = Console()

# CLI app
app = typer.Typer(
    name="swtos",
    help="SWT-OS - native and running platform detection for SWT bundles",
    invoke_without_command=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


def handle_error(e: Exception) -> None:
    """Handle and display errors nicely."""
    if isinstance(e, SwtOsError):
        console.print(f"[red]Error:[/red] {e}")
    else:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logger.exception("Unexpected error")
    raise typer.Exit(1)


def _apply_log_level() -> None:
    from swtos_core.config import get_config

    logging.getLogger().setLevel(get_config().log_level)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """Print the native and running platforms."""
    _apply_log_level()
    if ctx.invoked_subcommand is not None:
        return
    try:
        info = get_detector().detect()
    except Exception as e:
        handle_error(e)
    console.print(f"native={info.native}", highlight=False)
    console.print(f"running={info.running}", highlight=False)


# ============================================================================
# Root Commands
# ============================================================================

def _platform_row(label: str, identity: PlatformIdentity) -> list:
    swt = SwtPlatform.from_identity(identity)
    return [label, identity.name, os_dot_arch(identity), str(swt)]


@app.command("info")
def info_cmd():
    """Show the detected platforms and host information."""
    import platform
    import psutil

    try:
        info = get_detector().detect()
    except Exception as e:
        handle_error(e)

    table = Table(title="Platforms")
    table.add_column("Kind", style="cyan")
    table.add_column("Identity")
    table.add_column("Bundle key")
    table.add_column("SWT")
    table.add_row(*_platform_row("native", info.native))
    table.add_row(*_platform_row("running", info.running))
    console.print(table)
    console.print(f"  Native bundle: {SwtPlatform.from_identity(info.native).bundle_name()}", highlight=False)
    console.print(f"  Running bundle: {SwtPlatform.from_identity(info.running).bundle_name()}", highlight=False)

    console.print("\n[bold]System Information:[/bold]")
    console.print(f"  Platform: {platform.system()} {platform.release()}")
    console.print(f"  Python: {platform.python_version()}")
    console.print(f"  CPU Cores: {psutil.cpu_count()}")
    console.print(f"  Memory: {psutil.virtual_memory().total / (1024**3):.1f} GB")


@app.command("version")
def version_cmd():
    """Show SWT-OS version."""
    from swtos_core import __version__
    console.print(f"SWT-OS v{__version__}")


# ============================================================================
# Config Commands
# ============================================================================

@config_app.command("show")
def show_config_cmd():
    """Show current configuration."""
    from swtos_core.config import get_config

    config = get_config()
    console.print("\n[bold]SWT-OS Configuration:[/bold]")
    for key, value in config.model_dump().items():
        console.print(f"  {key}: {value}", highlight=False)


@config_app.command("set")
def set_config_cmd(
    key: str = typer.Argument(..., help="Config key (log_level, probe_command)"),
    values: List[str] = typer.Argument(..., help="New value; probe_command takes the full command line"),
):
    """Set a configuration value and save it."""
    from swtos_core.config import SwtOsConfig, get_config_manager
    from swtos_core.exceptions import ConfigError

    try:
        if key not in SwtOsConfig.model_fields:
            raise ConfigError(key, "unknown config key")
        value = values if key == "probe_command" else " ".join(values)
        manager = get_config_manager()
        manager.update(**{key: value})
        manager.save()
        console.print(f"[green]✓[/green] {key} = {value}", highlight=False)
    except Exception as e:
        handle_error(e)


@config_app.command("reset")
def reset_config_cmd():
    """Restore the default configuration and save it."""
    from swtos_core.config import get_config_manager

    try:
        manager = get_config_manager()
        manager.reset()
        manager.save()
        console.print("[green]✓[/green] Configuration reset to defaults")
    except Exception as e:
        handle_error(e)


@config_app.command("path")
def config_path_cmd():
    """Show configuration file path."""
    from swtos_core.config import get_config_manager

    manager = get_config_manager()
    console.print(f"Config file: {manager.config_path}", highlight=False)


def main():
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        sys.exit(0)


if __name__ == "__main__":
    main()
