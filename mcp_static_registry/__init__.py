"""
MCP Static Registry - a static-site generator for MCP server directories.

Reads a single JSON registry file and emits a tree of static JSON/HTML
files that mimic the MCP Registry REST API (``/v0.1/servers`` and the
per-server version endpoints), ready for any static file host.
"""

from mcp_static_registry.constants import APP_NAME, APP_VERSION

__version__ = APP_VERSION
__app_name__ = APP_NAME

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "__version__",
    "__app_name__",
]
