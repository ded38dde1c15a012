"""Console build summary and error display."""

import logging
import os
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcp_static_registry.builder import BuildReport
from mcp_static_registry.config.schema import BuildConfig
from mcp_static_registry.constants import APP_NAME, APP_VERSION
from mcp_static_registry.registry.models import Registry
from mcp_static_registry.render.endpoints import format_timestamp

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def gen_build_info(config: BuildConfig, report: BuildReport) -> Dict[str, Any]:
    """Generate a structured dictionary describing a finished build."""
    result = report.result
    opts = config.render
    return {
        "ts": format_timestamp(report.build_time),
        "input": config.input,
        "output_dir": result.output_dir,
        "servers": report.server_count,
        "endpoints": report.endpoint_count,
        "json_files": result.json_files,
        "html_files": result.html_files,
        "copied_files": list(result.copied_files),
        "html": opts.emit_html,
        "bare_server_path": opts.include_bare_server_path,
        "wrapped": opts.wrap_detail_responses,
    }


def disp_build_summary(build_info: Dict[str, Any], out: Optional[Console] = None) -> None:
    """Print the build summary table."""
    out = out or console
    table = Table(
        title=f"{APP_NAME} v{APP_VERSION}",
        show_header=False,
        title_style="bold",
    )
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Registry", escape(os.path.basename(build_info["input"])))
    table.add_row("Servers", str(build_info["servers"]))
    table.add_row("Endpoints", str(build_info["endpoints"]))
    table.add_row("JSON files", str(build_info["json_files"]))
    table.add_row("HTML files", str(build_info["html_files"]))
    table.add_row("Static files", escape(", ".join(build_info["copied_files"])) or "-")
    table.add_row(
        "Options",
        f"html={'on' if build_info['html'] else 'off'}, "
        f"bare server path={'on' if build_info['bare_server_path'] else 'off'}, "
        f"wrapped details={'on' if build_info['wrapped'] else 'off'}",
    )
    table.add_row("Output", escape(build_info["output_dir"]))
    table.add_row("Built at", build_info["ts"])

    out.print(table)
    out.print("[bold green]✓ Build complete.[/bold green]")


def disp_validation_ok(config: BuildConfig, registry: Registry, out: Optional[Console] = None) -> None:
    """Report a successful ``validate`` run."""
    out = out or console
    out.print(
        f"[bold green]✓[/bold green] {escape(config.input)}: "
        f"{len(registry)} server(s) valid."
    )


def disp_error(exc: BaseException, out: Optional[Console] = None) -> None:
    """Print a one-line diagnostic for a terminal build error."""
    out = out or err_console
    out.print(f"[bold red]❌ Error:[/bold red] {escape(str(exc))}", highlight=False, soft_wrap=True)


def log_build_summary(build_info: Dict[str, Any], log_lvl: int = logging.INFO) -> None:
    """Write the build summary to the log."""
    log_lines = [
        f"Build finished at {build_info['ts']}",
        f"  Registry: {build_info['input']}",
        f"  Output: {build_info['output_dir']}",
        f"  Servers: {build_info['servers']}, endpoints: {build_info['endpoints']}",
        f"  Files: {build_info['json_files']} JSON, {build_info['html_files']} HTML",
    ]
    if build_info["copied_files"]:
        log_lines.append(f"  Static files: {', '.join(build_info['copied_files'])}")
    logger.log(log_lvl, "\n".join(log_lines))
