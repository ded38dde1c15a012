"""``${VAR}`` expansion for build configuration values.

Lets a checked-in ``registry-build.yaml`` pick up CI-specific paths, e.g.
``output_dir: ${PAGES_DIR:-dist}``.
"""

from __future__ import annotations

import os
import re
from typing import Any

# ${NAME} or ${NAME:-fallback}
_ENV_VAR_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _substitute(match: re.Match[str]) -> str:
    name, fallback = match.group(1), match.group(2)
    value = os.environ.get(name)
    if value:
        return value
    if fallback is not None:
        return fallback
    # Unset with no fallback keeps the placeholder text.
    return value if value is not None else match.group(0)


def expand_env_vars(value: Any) -> Any:
    """Recursively expand ``${VAR}`` / ``${VAR:-default}`` in string values.

    Mappings and lists are walked; other leaves are returned unchanged.
    """
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(_substitute, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value
