"""HTML pages: JSON mirrors and the landing page.

Templates live in ``mcp_static_registry/templates`` and are rendered with
Jinja2 autoescaping, so every interpolated value (server names, ids,
descriptions, the JSON payload itself) is HTML-escaped.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List
from urllib.parse import quote, urlsplit

from jinja2 import Environment, PackageLoader, select_autoescape

from mcp_static_registry.config.schema import RenderOptions, SiteOptions
from mcp_static_registry.constants import DEFAULT_SITE_TITLE, LATEST_ALIAS
from mcp_static_registry.registry.models import Registry


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("mcp_static_registry", "templates"),
        autoescape=select_autoescape(["html"]),
    )


def segment(value: str) -> str:
    """URL-quote a single path segment."""
    return quote(value, safe="")


def home_href(virtual_path: str) -> str:
    """Relative link from *virtual_path* back to the site root.

    Relative links keep the site working when hosted under a sub-path
    (e.g. a GitHub Pages project site).
    """
    depth = len([part for part in virtual_path.split("/") if part])
    return "../" * depth if depth else "./"


def _web_link(url: str) -> str:
    """Return *url* if it is an http(s) URL, else an empty string."""
    try:
        scheme = urlsplit(url).scheme
    except ValueError:
        return ""
    return url if scheme in ("http", "https") else ""


def _install_lines(installation: Dict[str, Any]) -> List[str]:
    return [f"{method}: {value}" for method, value in installation.items() if isinstance(value, str)]


def render_json_page(
    title: str,
    json_text: str,
    *,
    endpoint: str,
    site_title: str = DEFAULT_SITE_TITLE,
) -> str:
    """Render the HTML mirror of a JSON endpoint.

    *json_text* must be the exact text written to the sibling ``index.json``;
    un-escaping the ``<pre>`` block yields it back unchanged.
    """
    template = _environment().get_template("json_page.html")
    return template.render(
        title=title,
        site_title=site_title,
        endpoint=endpoint,
        json_href="index.json",
        json_text=json_text,
        home_href=home_href(endpoint),
    )


def render_landing_page(
    registry: Registry,
    build_time: str,
    *,
    api_base: str,
    options: RenderOptions,
    site: SiteOptions,
) -> str:
    """Render the site's ``index.html`` summarising every server."""
    base = f"{api_base}/servers"
    servers: List[Dict[str, Any]] = []
    for server in registry.servers:
        server_href = f"{base}/{segment(server.id)}/"
        servers.append(
            {
                "id": server.id,
                "name": server.name,
                "version": server.version,
                "description": server.description,
                "author": server.author.name if server.author else "",
                "license": server.license,
                "tags": server.tags,
                "capabilities": server.capabilities,
                "installation": _install_lines(server.installation),
                "homepage": _web_link(server.homepage),
                "repository": _web_link(server.repository_url),
                "bare_href": server_href if options.include_bare_server_path else "",
                "latest_href": f"{server_href}versions/{LATEST_ALIAS}/",
                "version_href": f"{server_href}versions/{segment(server.version)}/",
            }
        )

    template = _environment().get_template("landing.html")
    return template.render(
        title=site.title,
        base_url=site.base_url,
        listing_href=f"{base}/",
        server_count=len(registry.servers),
        servers=servers,
        metadata=registry.metadata,
        build_time=build_time,
    )
