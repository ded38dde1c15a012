"""Registry file loading.

:func:`load_registry` reads the JSON registry file and checks the one
structural rule every later stage relies on: a ``servers`` list.  The
parsed document is returned untouched; per-entry checks live in
:mod:`mcp_static_registry.registry.validator`.
"""

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Dict, List

from mcp_static_registry.errors import NotFoundError, ParseError, RegistryLoadError, SchemaError
from mcp_static_registry.registry.models import Registry, RegistryMetadata, ServerEntry

logger = logging.getLogger(__name__)


def _reject_constant(path: str):
    # NaN, Infinity and -Infinity are Python extensions, not JSON
    def _hook(name: str) -> Any:
        raise ParseError(path, f"non-standard JSON constant '{name}'")

    return _hook


def _finite_float(path: str):
    def _hook(text: str) -> float:
        value = float(text)
        if not math.isfinite(value):
            raise ParseError(path, f"number out of range '{text}'")
        return value

    return _hook


def load_registry(path: str) -> Dict[str, Any]:
    """Read and parse the registry document at *path*.

    Raises:
        NotFoundError: The file does not exist.
        ParseError: The content is not well-formed UTF-8 JSON.
        SchemaError: The document is not an object or ``servers`` is not a list.
    """
    logger.debug("Loading registry file: %s", path)

    if not os.path.isfile(path):
        raise NotFoundError(path)

    try:
        with open(path, "r", encoding="utf-8") as fh:
            document = json.load(
                fh,
                parse_constant=_reject_constant(path),
                parse_float=_finite_float(path),
            )
    except json.JSONDecodeError as exc:
        raise ParseError(
            path, f"{exc.msg} at line {exc.lineno}, column {exc.colno}", exc
        ) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"file is not valid UTF-8 ({exc.reason})", exc) from exc
    except FileNotFoundError as exc:
        raise NotFoundError(path) from exc
    except OSError as exc:
        raise RegistryLoadError(f"Cannot read registry file: {exc.strerror or exc}", path) from exc

    if not isinstance(document, dict):
        raise SchemaError(
            f"Registry must be a JSON object, got {type(document).__name__}", path
        )

    servers = document.get("servers")
    if servers is None:
        raise SchemaError('Registry must contain a "servers" array', path)
    if not isinstance(servers, list):
        raise SchemaError(
            f'Registry "servers" must be an array, got {type(servers).__name__}', path
        )

    logger.info("Registry '%s' loaded with %d server(s).", path, len(servers))
    return document


def build_registry(document: Dict[str, Any], servers: List[ServerEntry]) -> Registry:
    """Assemble a :class:`Registry` from a loaded document and its validated entries."""
    metadata = RegistryMetadata.from_dict(document.get("metadata"))
    if metadata is not None and metadata.count is not None and metadata.count != len(servers):
        logger.warning(
            "Registry metadata count (%d) does not match the number of servers (%d).",
            metadata.count,
            len(servers),
        )
    return Registry(servers=tuple(servers), metadata=metadata, document=document)
