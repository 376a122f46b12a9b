"""Salesforce MCP server command line."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from salesforce_mcp import __version__
from salesforce_mcp.config import MCPConfig
from salesforce_mcp.errors import SalesforceMCPError
from salesforce_mcp.server import MCPServer
from salesforce_mcp.session import BackendSession
from salesforce_mcp.tools import build_registry

app = typer.Typer(help="Salesforce MCP server")
# stdout is reserved for the stdio transport
console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> MCPConfig:
    try:
        return MCPConfig.load(config_file)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def start(
    host: str = typer.Option(None, help="Server host (SSE/HTTP only, overrides config)"),
    port: int = typer.Option(None, help="Server port (SSE/HTTP only, overrides config)"),
    transport: str = typer.Option(None, help="Transport: stdio, sse or http (overrides config)"),
    connect: bool = typer.Option(
        None, "--connect/--no-connect", help="Log in to Salesforce at startup (overrides config)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Path to salesforce-mcp.yaml (default: ./salesforce-mcp.yaml)"
    ),
    log_level: str = typer.Option(None, help="Logging level (overrides config)"),
):
    """
    Start the MCP server.

    Server settings are loaded from salesforce-mcp.yaml if it exists, then
    SALESFORCE_MCP_* environment variables, then command-line options.
    Salesforce credentials come from SALESFORCE_* environment variables.

    Examples:
        # Start with stdio transport (uses config or defaults)
        salesforce-mcp start

        # Start with streamable HTTP transport
        salesforce-mcp start --transport http --host 0.0.0.0 --port 8000
    """
    config = _load_config(config_file)

    if host is not None:
        config.host = host
    if port is not None:
        config.port = port
    if transport is not None:
        config.transport = transport
    if connect is not None:
        config.connect_on_startup = connect
    if log_level is not None:
        config.log_level = log_level

    try:
        config.validate()
        _configure_logging(config.log_level)

        server = MCPServer(
            host=config.host,
            port=config.port,
            transport=config.transport,
            connect_on_startup=config.connect_on_startup,
        )

        console.print(f"[green]Starting Salesforce MCP server {__version__}...[/green]")
        console.print(f"Transport: {config.transport}")
        if config.transport != "stdio":
            console.print(f"Listening on {config.host}:{config.port}")

        server.start()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except SalesforceMCPError as e:
        console.print(f"[red]Salesforce error:[/red] {e}")
        raise typer.Exit(1)
    except RuntimeError as e:
        console.print(f"[red]Error starting server:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def tools():
    """
    List the operations the server advertises.

    Examples:
        salesforce-mcp tools
    """
    registry = build_registry()

    table = Table(title=f"Salesforce MCP Tools ({len(registry)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Required")
    table.add_column("Description")

    for descriptor in registry:
        table.add_row(
            descriptor.name,
            ", ".join(descriptor.required),
            descriptor.description,
        )

    console.print(table)


@app.command()
def check():
    """
    Verify Salesforce credentials by logging in once.

    Examples:
        salesforce-mcp check
    """
    session = BackendSession()

    async def _connect():
        try:
            return await session.connect()
        finally:
            await session.close()

    try:
        client = asyncio.run(_connect())
    except SalesforceMCPError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Salesforce Connection", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Status", "[green]Connected[/green]")
    table.add_row("Instance URL", client.instance_url)
    table.add_row("API Version", client.api_version)
    console.print(table)

