"""Configuration loading and validation for MCP Static Registry."""

from mcp_static_registry.config.env import expand_env_vars
from mcp_static_registry.config.loader import (
    find_config_file,
    load_build_config,
    resolve_build_config,
    validate_config_data,
)
from mcp_static_registry.config.schema import (
    RENDER_PRESETS,
    BuildConfig,
    RenderOptions,
    SiteOptions,
    ValidationOptions,
)

__all__ = [
    "RENDER_PRESETS",
    "BuildConfig",
    "RenderOptions",
    "SiteOptions",
    "ValidationOptions",
    "expand_env_vars",
    "find_config_file",
    "load_build_config",
    "resolve_build_config",
    "validate_config_data",
]
