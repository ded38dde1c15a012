"""Endpoint rendering: registry → static API documents and HTML pages."""

from mcp_static_registry.render.endpoints import (
    ContentKind,
    Endpoint,
    RenderedFile,
    build_endpoints,
    dump_json,
    format_timestamp,
    render_endpoint,
    render_site,
    servers_base,
    wrap_server,
)
from mcp_static_registry.render.html import render_json_page, render_landing_page

__all__ = [
    "ContentKind",
    "Endpoint",
    "RenderedFile",
    "build_endpoints",
    "dump_json",
    "format_timestamp",
    "render_endpoint",
    "render_json_page",
    "render_landing_page",
    "render_site",
    "servers_base",
    "wrap_server",
]
