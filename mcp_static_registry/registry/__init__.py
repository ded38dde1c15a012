"""Registry document models, loading and validation."""

from mcp_static_registry.registry.loader import build_registry, load_registry
from mcp_static_registry.registry.models import Author, Registry, RegistryMetadata, ServerEntry
from mcp_static_registry.registry.validator import (
    is_valid_server_id,
    validate_server,
    validate_servers,
)

__all__ = [
    "Author",
    "Registry",
    "RegistryMetadata",
    "ServerEntry",
    "build_registry",
    "is_valid_server_id",
    "load_registry",
    "validate_server",
    "validate_servers",
]
