"""Endpoint rendering.

Pure functions mapping a validated :class:`Registry` to the documents of
the static API:

* ``/{api_base}/servers/``: the registry verbatim
* ``/{api_base}/servers/{id}/``: the raw server (optional)
* ``/{api_base}/servers/{id}/versions/{version}/``: the detail envelope
* ``/{api_base}/servers/{id}/versions/latest/``: same document as above

and to the files (``index.json`` / ``index.html``) that materialise them.
Nothing here touches the filesystem.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from mcp_static_registry.config.schema import RenderOptions, SiteOptions
from mcp_static_registry.constants import (
    DEFAULT_API_BASE,
    HTML_INDEX,
    JSON_INDEX,
    LATEST_ALIAS,
    OFFICIAL_META_KEY,
    SERVER_SCHEMA_URL,
    SERVER_STATUS_ACTIVE,
)
from mcp_static_registry.registry.models import Registry, ServerEntry
from mcp_static_registry.render.html import render_json_page, render_landing_page


class ContentKind(str, Enum):
    JSON = "json"
    HTML = "html"


@dataclass(frozen=True)
class Endpoint:
    """One virtual REST resource and the document it serves."""

    path: str
    document: Any
    title: str


@dataclass(frozen=True)
class RenderedFile:
    """A file to write, *path* relative to the output root."""

    path: str
    kind: ContentKind
    content: str


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def dump_json(document: Any) -> str:
    """Serialise *document* with two-space indentation, keeping key order."""
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)


def servers_base(api_base: str = DEFAULT_API_BASE) -> str:
    return f"/{api_base.strip('/')}/servers"


def wrap_server(server: ServerEntry, timestamp: str, *, is_latest: bool = True) -> Dict[str, Any]:
    """Build the ``{server, _meta}`` detail envelope for *server*.

    ``$schema`` comes first; the server's own fields follow in source
    order (a ``$schema`` carried by the record replaces the injected value).
    """
    server_doc: Dict[str, Any] = {"$schema": SERVER_SCHEMA_URL}
    server_doc.update(server.to_dict())
    return {
        "server": server_doc,
        "_meta": {
            OFFICIAL_META_KEY: {
                "status": SERVER_STATUS_ACTIVE,
                "publishedAt": timestamp,
                "updatedAt": timestamp,
                "isLatest": is_latest,
            }
        },
    }


def _detail_document(server: ServerEntry, options: RenderOptions, timestamp: str) -> Any:
    if options.wrap_detail_responses:
        # Only one version per server is modelled, so it is always the latest.
        return wrap_server(server, timestamp, is_latest=True)
    return server.to_dict()


def build_endpoints(
    registry: Registry,
    options: RenderOptions,
    build_time: datetime,
    *,
    api_base: str = DEFAULT_API_BASE,
) -> List[Endpoint]:
    """Return every endpoint of the static API in write order."""
    timestamp = format_timestamp(build_time)
    base = servers_base(api_base)

    endpoints: List[Endpoint] = [
        Endpoint(path=f"{base}/", document=registry.to_dict(), title="All MCP Servers")
    ]

    for server in registry.servers:
        server_path = f"{base}/{server.id}"
        if options.include_bare_server_path:
            endpoints.append(
                Endpoint(
                    path=f"{server_path}/",
                    document=server.to_dict(),
                    title=f"{server.name} - Details",
                )
            )
        endpoints.append(
            Endpoint(
                path=f"{server_path}/versions/{server.version}/",
                document=_detail_document(server, options, timestamp),
                title=f"{server.name} v{server.version}",
            )
        )
        endpoints.append(
            Endpoint(
                path=f"{server_path}/versions/{LATEST_ALIAS}/",
                document=_detail_document(server, options, timestamp),
                title=f"{server.name} (Latest)",
            )
        )

    return endpoints


def render_endpoint(
    endpoint: Endpoint,
    options: RenderOptions,
    *,
    site_title: str,
) -> List[RenderedFile]:
    """Render *endpoint* to its ``index.json`` and, if enabled, ``index.html``."""
    directory = endpoint.path.strip("/")
    json_text = dump_json(endpoint.document)
    files = [RenderedFile(f"{directory}/{JSON_INDEX}", ContentKind.JSON, json_text)]
    if options.emit_html:
        html_text = render_json_page(
            endpoint.title,
            json_text,
            endpoint=endpoint.path,
            site_title=site_title,
        )
        files.append(RenderedFile(f"{directory}/{HTML_INDEX}", ContentKind.HTML, html_text))
    return files


def render_site(
    registry: Registry,
    options: RenderOptions,
    build_time: datetime,
    *,
    api_base: str = DEFAULT_API_BASE,
    site: Optional[SiteOptions] = None,
) -> List[RenderedFile]:
    """Render the whole site: every endpoint plus the landing page."""
    site = site or SiteOptions()
    files: List[RenderedFile] = []
    for endpoint in build_endpoints(registry, options, build_time, api_base=api_base):
        files.extend(render_endpoint(endpoint, options, site_title=site.title))

    landing = render_landing_page(
        registry,
        format_timestamp(build_time),
        api_base=api_base.strip("/"),
        options=options,
        site=site,
    )
    files.append(RenderedFile(HTML_INDEX, ContentKind.HTML, landing))
    return files
