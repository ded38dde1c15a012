"""Shared constants for MCP Static Registry."""

APP_NAME = "MCP Static Registry"
APP_VERSION = "0.1.0"

# Input / output defaults
DEFAULT_REGISTRY_FILE = "mcp-registry.json"
DEFAULT_OUTPUT_DIR = "dist"
DEFAULT_API_BASE = "v0.1"
DEFAULT_STATIC_FILES = (".nojekyll", "robots.txt")

# Config file search order (first match wins)
CONFIG_SEARCH_ORDER = ("registry-build.yaml", "registry-build.yml")
CONFIG_ENV_VAR = "MCP_REGISTRY_CONFIG"

# Rendered document constants
SERVER_SCHEMA_URL = "https://static.modelcontextprotocol.io/schemas/2025-10-17/server.schema.json"
OFFICIAL_META_KEY = "io.modelcontextprotocol.registry/official"
SERVER_STATUS_ACTIVE = "active"
LATEST_ALIAS = "latest"

JSON_INDEX = "index.json"
HTML_INDEX = "index.html"

# Site defaults
DEFAULT_SITE_TITLE = "MCP Private Registry"
DEFAULT_BASE_URL = "YOUR_PAGES_URL"

# Logging defaults
DEFAULT_LOG_LEVEL = "INFO"
