"""chartmcp CLI: list chart tools and dispatch tool calls.

Usage:
    chartmcp tools
    chartmcp call generate_line_chart --args '{"data": [...]}'
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table as RichTable

from .charts.contracts import list_tools
from .config import DEFAULT_UPLOAD_API, DEFAULT_VIS_REQUEST_SERVER, ServerConfig
from .dispatcher import Dispatcher

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="chartmcp")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--vis-server",
    envvar="VIS_REQUEST_SERVER",
    default=DEFAULT_VIS_REQUEST_SERVER,
    show_default=True,
    help="Chart / Map API endpoint (or set VIS_REQUEST_SERVER).",
)
@click.option(
    "--service-id",
    envvar="SERVICE_ID",
    default="",
    help="Service identifier sent to the Map API (or set SERVICE_ID).",
)
@click.option(
    "--render-service",
    envvar="RENDER_SERVICE_URL",
    default=None,
    help="External rendering service used when local rendering fails (or set RENDER_SERVICE_URL).",
)
@click.option(
    "--upload-api",
    envvar="UPLOAD_API",
    default=DEFAULT_UPLOAD_API,
    show_default=True,
    help="File upload endpoint for locally rendered charts (or set UPLOAD_API).",
)
@click.option(
    "--disabled-tools",
    envvar="DISABLED_TOOLS",
    default="",
    help="Comma-separated tool names to hide from the tool list (or set DISABLED_TOOLS).",
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    vis_server: str,
    service_id: str,
    render_service: str | None,
    upload_api: str,
    disabled_tools: str,
):
    """chartmcp: validate, route and render chart tool calls."""
    _setup_logging(verbose)
    ctx.obj = ServerConfig.from_env({
        "VIS_REQUEST_SERVER": vis_server,
        "SERVICE_ID": service_id,
        "RENDER_SERVICE_URL": render_service or "",
        "UPLOAD_API": upload_api,
        "DISABLED_TOOLS": disabled_tools,
    })


@main.command()
@click.pass_obj
def tools(config: ServerConfig):
    """List available chart tools."""
    table = RichTable(title="Chart Tools", show_lines=False)
    table.add_column("Tool", style="bold cyan")
    table.add_column("Chart type")
    table.add_column("Strategy", style="dim")

    for contract in list_tools(config):
        table.add_row(
            contract.name,
            contract.chart_type.value if contract.chart_type else "[italic]any[/italic]",
            contract.strategy.value if contract.strategy else "by type",
        )

    console.print(table)


@main.command()
@click.argument("tool_name")
@click.option("--args", "args_json", default=None, help="Tool arguments as a JSON object.")
@click.option(
    "--args-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read tool arguments from a JSON file.",
)
@click.pass_obj
def call(config: ServerConfig, tool_name: str, args_json: str | None, args_file: Path | None):
    """Dispatch TOOL_NAME and print the response envelope as JSON."""
    if args_json and args_file:
        raise click.UsageError("Use either --args or --args-file, not both.")

    raw = args_file.read_text(encoding="utf-8") if args_file else (args_json or "{}")
    try:
        arguments = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Arguments are not valid JSON: {exc}") from exc
    if not isinstance(arguments, dict):
        raise click.BadParameter("Arguments must be a JSON object.")

    envelope = asyncio.run(Dispatcher(config).call_tool(tool_name, arguments))
    console.print_json(json.dumps(envelope.to_wire(), ensure_ascii=False))

    if envelope.is_error:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
