"""Shared fixtures for the static registry tests."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

BUILD_TIME = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
BUILD_STAMP = "2026-01-02T03:04:05.678Z"


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """Undo the CLI's logging setup so caplog sees every record."""
    root = logging.getLogger()
    root_handlers = list(root.handlers)
    root_level = root.level
    yield
    for handler in root.handlers:
        if handler not in root_handlers:
            handler.close()
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    app_logger = logging.getLogger("mcp_static_registry")
    app_logger.handlers.clear()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def build_time() -> datetime:
    return BUILD_TIME


@pytest.fixture()
def build_stamp() -> str:
    return BUILD_STAMP


@pytest.fixture()
def sample_registry() -> Dict[str, Any]:
    return {
        "servers": [
            {
                "id": "figma-mcp",
                "name": "Figma MCP",
                "version": "1.0.0",
                "description": "Read Figma files",
                "repository": "https://github.com/example/figma-mcp",
                "license": "MIT",
                "author": {"name": "Example", "email": "dev@example.com"},
                "installation": {"npm": "@example/figma-mcp"},
                "capabilities": ["resources", "tools"],
                "tags": ["design"],
            },
            {
                "id": "com.example.docs",
                "name": "Docs <Search> & \"Quotes\" 'too'",
                "version": "2024.06.1",
                "x-custom": {"nested": [1, 2, 3]},
            },
        ],
        "metadata": {"version": "1.0.0", "lastUpdated": "2026-01-01T00:00:00Z", "count": 2},
    }


@pytest.fixture()
def write_registry(tmp_path: Path) -> Callable[[Any], Path]:
    """Return a helper writing *data* as ``mcp-registry.json`` under tmp_path."""

    def _write(data: Any, name: str = "mcp-registry.json") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
