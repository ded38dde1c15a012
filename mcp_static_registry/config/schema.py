"""Pydantic configuration models for MCP Static Registry.

Defines the validated build configuration using the versioned v1 format.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mcp_static_registry.constants import (
    DEFAULT_API_BASE,
    DEFAULT_BASE_URL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REGISTRY_FILE,
    DEFAULT_SITE_TITLE,
    DEFAULT_STATIC_FILES,
)

PresetName = Literal["full", "json-only", "legacy"]

# Fixed settings of the render knobs.  ``legacy`` reproduces the original
# raw-record detail endpoints.
RENDER_PRESETS: Dict[str, Dict[str, bool]] = {
    "full": {
        "emit_html": True,
        "include_bare_server_path": True,
        "wrap_detail_responses": True,
    },
    "json-only": {
        "emit_html": False,
        "include_bare_server_path": False,
        "wrap_detail_responses": True,
    },
    "legacy": {
        "emit_html": True,
        "include_bare_server_path": True,
        "wrap_detail_responses": False,
    },
}


class RenderOptions(BaseModel):
    """Endpoint rendering policy knobs."""

    model_config = ConfigDict(extra="forbid")

    preset: Optional[PresetName] = Field(
        default=None,
        description="Named preset; explicit knob values take precedence.",
    )
    emit_html: bool = Field(
        default=True,
        description="Render an HTML mirror beside every JSON document.",
    )
    include_bare_server_path: bool = Field(
        default=True,
        description="Emit the unwrapped {base}/{id}/ endpoint.",
    )
    wrap_detail_responses: bool = Field(
        default=True,
        description="Wrap version endpoints in the {server, _meta} envelope.",
    )

    @model_validator(mode="before")
    @classmethod
    def apply_preset(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        preset = data.get("preset")
        if preset is None or preset not in RENDER_PRESETS:
            # Unknown presets are reported by the Literal check.
            return data
        merged: Dict[str, Any] = dict(RENDER_PRESETS[preset])
        merged.update(data)
        return merged


class ValidationOptions(BaseModel):
    """Registry validation strictness."""

    model_config = ConfigDict(extra="forbid")

    require_unique_ids: bool = Field(
        default=True,
        description="Reject registries where two servers share an id.",
    )


class SiteOptions(BaseModel):
    """Landing page presentation settings."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(default=DEFAULT_SITE_TITLE, min_length=1)
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Public URL the site is served from (shown on the landing page).",
    )


class BuildConfig(BaseModel):
    """Top-level build configuration (``registry-build.yaml``)."""

    model_config = ConfigDict(extra="forbid")

    version: Literal["1"] = "1"
    input: str = Field(default=DEFAULT_REGISTRY_FILE, min_length=1)
    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, min_length=1)
    api_base: str = Field(default=DEFAULT_API_BASE)
    static_dir: Optional[str] = Field(
        default=None,
        description="Where passthrough files are read from (default: the input file's directory).",
    )
    static_files: List[str] = Field(default_factory=lambda: list(DEFAULT_STATIC_FILES))
    render: RenderOptions = Field(default_factory=RenderOptions)
    validation: ValidationOptions = Field(default_factory=ValidationOptions)
    site: SiteOptions = Field(default_factory=SiteOptions)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        # YAML reads an unquoted ``version: 1`` as an int
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("api_base")
    @classmethod
    def check_api_base(cls, v: str) -> str:
        v = v.strip("/")
        if not v or "\\" in v or any(part in ("", ".", "..") for part in v.split("/")):
            raise ValueError(f"api_base must be a relative URL path, got '{v}'")
        return v

    @field_validator("static_files")
    @classmethod
    def check_static_files(cls, v: List[str]) -> List[str]:
        for name in v:
            if not name or "/" in name or "\\" in name or name in (".", ".."):
                raise ValueError(f"static file entries must be plain file names, got '{name}'")
        return v

    def resolved_static_dir(self) -> str:
        """Return the directory passthrough files are copied from."""
        if self.static_dir is not None:
            return self.static_dir
        return os.path.dirname(os.path.abspath(self.input))
