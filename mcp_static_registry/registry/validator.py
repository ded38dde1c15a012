"""Per-entry server validation.

A single left-to-right scan over the raw ``servers`` list that stops at
the first invalid entry.  Nothing is modified; valid input comes back as
typed :class:`ServerEntry` objects.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Sequence

from mcp_static_registry.errors import (
    DuplicateIdError,
    InvalidIdError,
    InvalidVersionError,
    MissingFieldError,
    SchemaError,
)
from mcp_static_registry.registry.models import ServerEntry

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "version")

_SERVER_ID_RE = re.compile(r"[A-Za-z0-9.\-]+")

# Segments that resolve to the current/parent directory
_DOT_SEGMENTS = frozenset({".", ".."})


def is_valid_server_id(server_id: str) -> bool:
    """Return ``True`` if *server_id* is safe to use as a path segment."""
    return bool(_SERVER_ID_RE.fullmatch(server_id)) and server_id not in _DOT_SEGMENTS


def is_valid_version(version: str) -> bool:
    """Return ``True`` if *version* is safe to use as a path segment."""
    return "/" not in version and "\\" not in version and version not in _DOT_SEGMENTS


def _is_missing(value: Any) -> bool:
    # absent, null, or an empty/zero/false scalar; empty lists and objects are present
    return value is None or (isinstance(value, (str, int, float)) and not value)


def _missing_fields(entry: Dict[str, Any]) -> List[str]:
    return [name for name in REQUIRED_FIELDS if _is_missing(entry.get(name))]


def validate_server(entry: Any, index: int) -> ServerEntry:
    """Validate a single raw server record at position *index*."""
    if not isinstance(entry, dict):
        raise SchemaError(
            f"Server at index {index} must be a JSON object, got {type(entry).__name__}"
        )

    missing = _missing_fields(entry)
    if missing:
        raise MissingFieldError(index, missing)

    for name in REQUIRED_FIELDS:
        if not isinstance(entry[name], str):
            raise SchemaError(
                f"Server at index {index} field '{name}' must be a string, "
                f"got {type(entry[name]).__name__}"
            )

    server_id = entry["id"]
    if not is_valid_server_id(server_id):
        raise InvalidIdError(server_id, index)

    if not is_valid_version(entry["version"]):
        raise InvalidVersionError(server_id, entry["version"], index)

    return ServerEntry.from_dict(entry)


def validate_servers(
    raw_servers: Sequence[Any],
    *,
    require_unique_ids: bool = True,
) -> List[ServerEntry]:
    """Validate every raw server record, failing fast at the first violation.

    Raises:
        SchemaError: An entry is not an object or a required field is not a string.
        MissingFieldError: ``id``, ``name`` or ``version`` is absent or empty.
        InvalidIdError: The id contains characters outside ``[A-Za-z0-9.-]``.
        InvalidVersionError: The version cannot be used as a path segment.
        DuplicateIdError: Two entries share an id and *require_unique_ids* is set.
    """
    seen: Dict[str, int] = {}
    servers: List[ServerEntry] = []
    for index, entry in enumerate(raw_servers):
        server = validate_server(entry, index)
        first_index = seen.get(server.id)
        if first_index is not None:
            if require_unique_ids:
                raise DuplicateIdError(server.id, first_index, index)
            logger.warning(
                "Duplicate server id '%s' at index %d (first seen at %d); "
                "its output will overwrite the earlier entry.",
                server.id,
                index,
                first_index,
            )
        else:
            seen[server.id] = index
        servers.append(server)

    logger.info("Validated %d server(s).", len(servers))
    return servers
