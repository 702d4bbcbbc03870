"""
Command-line interface for Dockwatch.

Provides commands for running the status agent, probing an endpoint and
inspecting the local container runtime.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from dockwatch import __version__
from dockwatch.config import Config
from dockwatch.core import COLLECTION_ERRORS, ProbeAgent, StatusAgent

console = Console()
err_console = Console(stderr=True)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging(level: str, log_file: str | None = None) -> None:
    """
    Configure logging with rich handlers.

    Informational records go to stdout, warnings and errors to stderr.
    """
    out_handler = RichHandler(console=console, rich_tracebacks=True)
    out_handler.addFilter(_BelowWarning())
    err_handler = RichHandler(console=err_console, rich_tracebacks=True)
    err_handler.setLevel(logging.WARNING)

    handlers: list[logging.Handler] = [out_handler, err_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="dockwatch")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-V",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """
    Dockwatch - container inventory polling agent.

    Snapshot the local Docker engine and report it to a status endpoint.
    """
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = Config.load(config)
    else:
        ctx.obj["config"] = Config.load()

    log_level = "DEBUG" if verbose else ctx.obj["config"].log_level
    setup_logging(log_level, ctx.obj["config"].log_file)


@main.command()
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0),
    help="Seconds between reports (overrides config)",
)
@click.option(
    "--once",
    is_flag=True,
    help="Send a single report and exit",
)
@click.pass_context
def run(ctx: click.Context, interval: float | None, once: bool) -> None:
    """
    Report the container inventory until interrupted.

    Each tick lists containers, images and networks and POSTs them to
    the configured status URL.
    """
    config: Config = ctx.obj["config"]

    if not config.status_token:
        err_console.print("[red]Error: No agent token configured.[/]")
        err_console.print("Set DOCKWATCH_STATUS_TOKEN or configure status.token in config file.")
        sys.exit(1)

    if interval is not None:
        config.status_interval = interval

    StatusAgent(config).run(once=once)


@main.command()
@click.option("--url", "-u", help="URL to probe (overrides config)")
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0),
    help="Seconds between requests (overrides config)",
)
@click.option(
    "--once",
    is_flag=True,
    help="Send a single request and exit",
)
@click.pass_context
def probe(ctx: click.Context, url: str | None, interval: float | None, once: bool) -> None:
    """Fetch a URL on an interval and log each response body."""
    config: Config = ctx.obj["config"]

    if url:
        config.probe_url = url
    if interval is not None:
        config.probe_interval = interval

    ProbeAgent(config).run(once=once)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the snapshot to file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.pass_context
def snapshot(ctx: click.Context, output: Path | None, format: str) -> None:
    """
    Take one inventory snapshot without reporting it.

    Shows the record counts, or the full payload with --format json.
    """
    config: Config = ctx.obj["config"]
    agent = StatusAgent(config)

    try:
        snap = agent.collect()
    except COLLECTION_ERRORS as e:
        err_console.print(f"[red]✗ Snapshot failed: {e}[/]")
        sys.exit(1)
    finally:
        agent.collector.close()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(snap.to_json(indent=2))
        console.print(f"[dim]Snapshot saved to: {output}[/]")
    elif format == "json":
        console.print_json(snap.to_json())
    else:
        table = Table(title="Inventory Snapshot", show_header=True)
        table.add_column("Resource", style="cyan")
        table.add_column("Count", justify="right")
        for name, count in snap.counts().items():
            table.add_row(name, str(count))
        console.print(table)


@main.command("version", short_help="Display version information")
def version() -> None:
    """Display version information for Dockwatch."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Dockwatch[/]\nVersion: [cyan]{__version__}[/]",
            border_style="blue",
            title="Version Information",
        )
    )
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="dim", width=20)
    table.add_column("Version", style="cyan")

    table.add_row("Dockwatch", __version__)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)
    console.print()


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current configuration and container runtime status."""
    config: Config = ctx.obj["config"]

    console.print()
    console.print(Panel.fit("[bold]Dockwatch Status[/]", border_style="blue"))

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Docker Socket", config.docker_socket)
    table.add_row("Status URL", config.status_url)
    table.add_row("Agent Token", "Configured" if config.status_token else "[dim]Not set[/]")
    table.add_row("Status Interval", f"{config.status_interval:g}s")
    table.add_row("Probe URL", config.probe_url)
    table.add_row("Probe Interval", f"{config.probe_interval:g}s")
    table.add_row("Log Level", config.log_level)

    console.print(table)
    console.print()

    agent = StatusAgent(config)
    try:
        reachable = agent.collector.ping()
    finally:
        agent.collector.close()

    if reachable:
        console.print("[green]✓ Container runtime is reachable[/]")
    else:
        console.print("[red]✗ Container runtime is not reachable[/]")


SAMPLE_CONFIG = """# Dockwatch Configuration

# Container runtime
docker:
  # Engine control socket (path or URL)
  socket: /var/run/docker.sock

  # Engine API timeout in seconds
  timeout: 120

  # Engine API version ("auto" negotiates with the engine)
  api_version: auto

# Status reporting
status:
  # Endpoint receiving inventory snapshots
  url: http://localhost:3000/api/v1/agent/status

  # Agent token sent as x-agent-token
  token: null  # Set via DOCKWATCH_STATUS_TOKEN env var for security

  # Seconds between reports
  interval: 15

  # Request timeout in seconds (null = no timeout)
  timeout: null

# Endpoint probe
probe:
  url: https://example.com/api
  interval: 5
  timeout: null

# Logging
log:
  # Log level: DEBUG, INFO, WARNING, ERROR
  level: INFO

  # Log file path (null = console only)
  file: null
"""


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.

    Creates a YAML configuration file with all available options.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(SAMPLE_CONFIG)
    console.print(f"[green]✓ Configuration file created: {output_path}[/]")
    console.print()
    console.print("Next steps:")
    console.print("  1. Edit the configuration file with your status URL")
    console.print("  2. Set your agent token: [cyan]export DOCKWATCH_STATUS_TOKEN=your-token[/]")
    console.print("  3. Start reporting: [cyan]dockwatch run[/]")


if __name__ == "__main__":
    main()
