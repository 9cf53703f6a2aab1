"""ecogen CLI - PM2 ecosystem generator Command Line Interface."""
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler

from ecogen_core import api
from ecogen_core.catalogue import DESCRIPTIONS, get_catalogue
from ecogen_core.config import get_config, get_config_manager
from ecogen_core.exceptions import EcogenError
from ecogen_core.schemas import Layout

# Setup logging; stdout is reserved for generated documents
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)]
)
logger = logging.getLogger("ecogen")

# Rich console for pretty output
console = Console()

# CLI app
app = typer.Typer(
    name="ecogen",
    help="ecogen - PM2 ecosystem generator",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


def handle_error(e: Exception) -> None:
    """Handle and display errors nicely."""
    if isinstance(e, EcogenError):
        console.print(f"[red]Error:[/red] {e}")
    else:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logger.exception("Unexpected error")
    raise typer.Exit(1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    """ecogen - PM2 ecosystem generator"""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, get_config().log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


# ============================================================================
# Ecosystem Commands
# ============================================================================

@app.command("generate")
def generate_cmd(
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout (development, standard, shared)"),
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Root directory for host layouts"),
    os_name: Optional[str] = typer.Option(None, "--os", help="Override detected OS (e.g. darwin, linux)"),
    arch: Optional[str] = typer.Option(None, "--arch", help="Override detected architecture (e.g. arm64, x86_64)"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format (json, js)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
):
    """Generate a PM2 ecosystem file."""
    try:
        document = api.generate(layout, root, os_name, arch, output_format, output)
        if output is None:
            typer.echo(document, nl=False)
        else:
            console.print(f"[green]✓[/green] Ecosystem written to [bold]{output}[/bold]")

    except Exception as e:
        handle_error(e)


@app.command("show")
def show_cmd(
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout (development, standard, shared)"),
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Root directory for host layouts"),
    os_name: Optional[str] = typer.Option(None, "--os", help="Override detected OS"),
    arch: Optional[str] = typer.Option(None, "--arch", help="Override detected architecture"),
):
    """Show the processes of a layout as a table."""
    try:
        topology = api.build_topology(layout, root, os_name, arch)

        table = Table(title=f"{topology.layout.value.capitalize()} Layout")
        table.add_column("Name", style="cyan")
        table.add_column("Port")
        table.add_column("Launch", style="magenta")
        table.add_column("Working Dir")
        table.add_column("Logs")

        for app_ in topology.apps:
            logs = app_.log_files.combined if app_.log_files else "[dim]supervisor default[/dim]"
            table.add_row(
                app_.name,
                str(app_.port),
                app_.launch_target,
                app_.cwd or "[dim].[/dim]",
                logs,
            )

        console.print(table)
        if topology.artifact_dir:
            console.print(f"  Binary path: [cyan]{topology.artifact_dir}[/cyan]")
        if topology.root:
            console.print(f"  Root: [cyan]{topology.root}[/cyan]")

    except Exception as e:
        handle_error(e)


@app.command("platform")
def platform_cmd(
    os_name: Optional[str] = typer.Option(None, "--os", help="Override detected OS"),
    arch: Optional[str] = typer.Option(None, "--arch", help="Override detected architecture"),
):
    """Show detected platform and the resolved binary path."""
    try:
        summary = api.host_summary(os_name, arch)
        console.print("\n[bold]Platform:[/bold]")
        console.print(f"  OS: {summary['raw_os']} ({summary['os_family']})")
        console.print(f"  Architecture: {summary['raw_arch']} ({summary['architecture']})")
        console.print(f"  Binary path: [cyan]{summary['artifact_dir']}[/cyan]")

    except Exception as e:
        handle_error(e)


@app.command("layouts")
def layouts_cmd():
    """List available layouts."""
    config = get_config()

    table = Table(title="Layouts")
    table.add_column("Name", style="cyan")
    table.add_column("Root")
    table.add_column("Services")
    table.add_column("Description")

    for layout in Layout:
        root = api.layout_root(layout, config) or "."
        table.add_row(layout.value, root, str(len(get_catalogue(layout))), DESCRIPTIONS[layout])

    console.print(table)


# ============================================================================
# Config Commands
# ============================================================================

@config_app.command("show")
def show_config_cmd():
    """Show current configuration."""
    config = get_config()
    console.print("\n[bold]ecogen Configuration:[/bold]")
    for key, value in config.model_dump(mode="json").items():
        console.print(f"  {key}: {value}")


@config_app.command("path")
def config_path_cmd():
    """Show configuration file path."""
    manager = get_config_manager()
    console.print(f"Config file: {manager.config_path}")


@config_app.command("set")
def config_set_cmd(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a setting and save it."""
    try:
        manager = get_config_manager()
        manager.update(**{key: value})
        manager.save()
        console.print(f"[green]✓[/green] {key} = {value}")

    except Exception as e:
        handle_error(e)


# ============================================================================
# Root Commands
# ============================================================================

@app.command("version")
def version_cmd():
    """Show ecogen version."""
    from ecogen_core import __version__
    console.print(f"ecogen (PM2 ecosystem generator) v{__version__}")


@app.command("info")
def info_cmd():
    """Show system information."""
    import platform
    import psutil

    summary = api.host_summary()

    console.print("\n[bold]System Information:[/bold]")
    console.print(f"  Platform: {platform.system()} {platform.release()}")
    console.print(f"  Architecture: {summary['raw_arch']}")
    console.print(f"  Python: {platform.python_version()}")
    console.print(f"  CPU Cores: {psutil.cpu_count()}")
    console.print(f"  Memory: {psutil.virtual_memory().total / (1024**3):.1f} GB")
    console.print(f"  Binary path: {summary['artifact_dir']}")
    console.print(f"  Config: {get_config_manager().config_path}")


def main():
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        sys.exit(0)


if __name__ == "__main__":
    main()
