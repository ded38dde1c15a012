"""Output tree writing."""

from mcp_static_registry.output.writer import (
    WriteResult,
    check_output_dir,
    copy_static_files,
    write_site,
)

__all__ = [
    "WriteResult",
    "check_output_dir",
    "copy_static_files",
    "write_site",
]
