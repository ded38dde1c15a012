"""Build orchestration: load → validate → render → write.

Each stage raises on failure and nothing here catches; the CLI is the
only place that turns a :class:`~mcp_static_registry.errors.RegistryBuildError`
into an exit status.  Output is only touched once loading and validation
have succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from mcp_static_registry.config.schema import BuildConfig
from mcp_static_registry.output.writer import WriteResult, write_site
from mcp_static_registry.registry.loader import build_registry, load_registry
from mcp_static_registry.registry.models import Registry
from mcp_static_registry.registry.validator import validate_servers
from mcp_static_registry.render.endpoints import ContentKind, render_site

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildReport:
    """Outcome of a successful :func:`build_site` run."""

    server_count: int
    endpoint_count: int
    build_time: datetime
    result: WriteResult


def check_registry(config: BuildConfig) -> Registry:
    """Load and validate the registry named by *config* without writing anything."""
    document = load_registry(config.input)
    servers = validate_servers(
        document["servers"],
        require_unique_ids=config.validation.require_unique_ids,
    )
    return build_registry(document, servers)


def build_site(config: BuildConfig, *, build_time: Optional[datetime] = None) -> BuildReport:
    """Run the full pipeline described by *config*.

    *build_time* stamps ``publishedAt``/``updatedAt`` and the landing page;
    it defaults to the current UTC time.
    """
    build_time = build_time or datetime.now(timezone.utc)
    opts = config.render
    logger.info(
        "Building static registry '%s' → '%s' (html=%s, bare_path=%s, wrapped=%s)",
        config.input,
        config.output_dir,
        opts.emit_html,
        opts.include_bare_server_path,
        opts.wrap_detail_responses,
    )

    registry = check_registry(config)

    files = render_site(
        registry,
        opts,
        build_time,
        api_base=config.api_base,
        site=config.site,
    )
    endpoint_count = sum(1 for f in files if f.kind is ContentKind.JSON)
    logger.info("Rendered %d endpoint(s) for %d server(s).", endpoint_count, len(registry))

    result = write_site(
        files,
        config.output_dir,
        static_dir=config.resolved_static_dir(),
        static_files=config.static_files,
        protected_paths=[config.input],
    )
    return BuildReport(
        server_count=len(registry),
        endpoint_count=endpoint_count,
        build_time=build_time,
        result=result,
    )
