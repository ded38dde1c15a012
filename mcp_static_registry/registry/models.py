"""Data models for the static MCP registry.

Defines the typed view of the registry document (``Registry``,
``RegistryMetadata``, ``ServerEntry``, ``Author``).  Every model keeps the
JSON object it was built from so rendered endpoints can reproduce the
source verbatim, unknown keys and key order included.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Author:
    """Author block of a server entry."""

    name: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional[Author]:
        if not isinstance(data, dict):
            return None
        return cls(name=data.get("name") or "", email=data.get("email") or "")


@dataclass(frozen=True)
class ServerEntry:
    """A single server entry in the registry catalog.

    ``id``, ``name`` and ``version`` are guaranteed non-empty once the
    entry has passed :func:`~mcp_static_registry.registry.validator.validate_servers`.
    The original JSON object is kept in *raw*.
    """

    id: str
    name: str
    version: str
    description: str = ""
    repository: Any = None
    homepage: str = ""
    license: str = ""
    author: Optional[Author] = None
    installation: Dict[str, Any] = field(default_factory=dict)
    capabilities: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ServerEntry:
        """Construct from a registry JSON object (tolerant of missing optional keys)."""
        installation = data.get("installation")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            version=data.get("version") or "",
            description=_string(data.get("description")),
            repository=data.get("repository"),
            homepage=_string(data.get("homepage")),
            license=_string(data.get("license")),
            author=Author.from_dict(data.get("author")),
            installation=installation if isinstance(installation, dict) else {},
            capabilities=_string_list(data.get("capabilities")),
            tags=_string_list(data.get("tags")),
            raw=data,
        )

    @property
    def repository_url(self) -> str:
        """URL of the source repository (``repository`` may be a string or ``{"url": ...}``)."""
        if isinstance(self.repository, dict):
            return str(self.repository.get("url") or "")
        if isinstance(self.repository, str):
            return self.repository
        return ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the source JSON object."""
        return copy.deepcopy(self.raw)


@dataclass(frozen=True)
class RegistryMetadata:
    """Optional ``metadata`` block of the registry document."""

    version: str = ""
    last_updated: str = ""
    count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional[RegistryMetadata]:
        if not isinstance(data, dict):
            return None
        count = data.get("count")
        return cls(
            version=str(data.get("version") or ""),
            last_updated=str(data.get("lastUpdated") or ""),
            count=count if isinstance(count, int) and not isinstance(count, bool) else None,
        )


@dataclass(frozen=True)
class Registry:
    """The root catalog: validated server entries plus the verbatim document."""

    servers: Tuple[ServerEntry, ...]
    metadata: Optional[RegistryMetadata] = None
    document: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.servers)

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the source registry document."""
        return copy.deepcopy(self.document)


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _string_list(value: Any) -> List[str]:
    # capabilities may be given as a list of tags or a {tag: {...}} mapping
    if isinstance(value, dict):
        return [str(k) for k in value]
    if isinstance(value, list):
        return [str(v) for v in value if isinstance(v, (str, int, float))]
    return []
