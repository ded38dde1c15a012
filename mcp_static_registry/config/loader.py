"""Build configuration loading and validation.

Loads a YAML configuration file, expands ``${ENV_VAR}`` placeholders,
and validates against the Pydantic models defined in :mod:`schema`.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from mcp_static_registry.config.env import expand_env_vars
from mcp_static_registry.config.schema import BuildConfig
from mcp_static_registry.constants import CONFIG_ENV_VAR, CONFIG_SEARCH_ORDER
from mcp_static_registry.errors import ConfigurationError

logger = logging.getLogger(__name__)

_BUILD_CONFIG_EXTS = frozenset({".yaml", ".yml"})


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Parse the build configuration at *cfg_fpath* into a plain mapping."""
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _BUILD_CONFIG_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}' for {cfg_fpath}; "
            "the build configuration must be a .yaml or .yml file."
        )

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as fh:
            raw_data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    # empty file: every setting keeps its default
    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            f"Build configuration {cfg_fpath} must be a YAML mapping, "
            f"got {type(raw_data).__name__}."
        )
    return raw_data


def format_validation_errors(exc: ValidationError) -> str:
    """Format Pydantic validation errors into a readable multi-line string."""
    lines: List[str] = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"]) or "(root)"
        lines.append(f"  • {loc}: {err['msg']}")
    return "\n".join(lines)


def validate_config_data(raw_data: Dict[str, Any]) -> BuildConfig:
    """Validate an already-parsed config mapping.

    Raises:
        ConfigurationError: With every validation failure listed.
    """
    try:
        return BuildConfig.model_validate(raw_data)
    except ValidationError as exc:
        error_summary = format_validation_errors(exc)
        raise ConfigurationError(
            f"Configuration validation failed ({len(exc.errors())} error(s)):\n" f"{error_summary}"
        ) from exc


def load_build_config(cfg_fpath: str) -> BuildConfig:
    """Load, expand, and validate the build configuration at *cfg_fpath*.

    Steps:
        1. Read YAML file
        2. Expand ``${VAR}`` environment variable references
        3. Validate against :class:`BuildConfig` (Pydantic)

    Relative ``input``, ``output_dir`` and ``static_dir`` paths are kept
    relative to the working directory, like the CLI flags.

    Raises:
        ConfigurationError: On file I/O errors, parse errors, or
            validation failures (all errors reported at once).
    """
    logger.debug("Loading configuration file: %s", cfg_fpath)

    if not os.path.exists(cfg_fpath):
        raise ConfigurationError(f"Configuration file does not exist: {cfg_fpath}")

    raw_data = _read_config_file(cfg_fpath)
    raw_data = expand_env_vars(raw_data)
    config = validate_config_data(raw_data)

    logger.info("Configuration '%s' loaded (v%s).", cfg_fpath, config.version)
    return config


def find_config_file(explicit: Optional[str] = None) -> Optional[str]:
    """Resolve the config file path.

    Order: *explicit* path → ``$MCP_REGISTRY_CONFIG`` → the first of
    ``registry-build.yaml`` / ``registry-build.yml`` in the working
    directory.  Returns ``None`` when nothing applies (built-in defaults).
    """
    if explicit:
        return explicit
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return from_env
    for name in CONFIG_SEARCH_ORDER:
        candidate = os.path.join(os.getcwd(), name)
        if os.path.isfile(candidate):
            return candidate
    return None


def resolve_build_config(explicit: Optional[str] = None) -> BuildConfig:
    """Load the config file found by :func:`find_config_file`, or the defaults."""
    cfg_fpath = find_config_file(explicit)
    if cfg_fpath is None:
        logger.debug("No configuration file found; using built-in defaults.")
        return BuildConfig()
    return load_build_config(cfg_fpath)
