"""Output tree materialisation.

Writes rendered files into a staging directory next to the output
directory and swaps it into place only once everything has been written,
so a failed build never leaves a half-written site behind and never
destroys the previous good one.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from mcp_static_registry.errors import WriteError
from mcp_static_registry.render.endpoints import ContentKind, RenderedFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Summary of a completed :func:`write_site` run."""

    output_dir: str
    json_files: int = 0
    html_files: int = 0
    copied_files: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_files(self) -> int:
        return self.json_files + self.html_files + len(self.copied_files)


def _target_path(root: Path, relative: str) -> Path:
    """Resolve *relative* under *root*, refusing anything that escapes it."""
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise WriteError(relative, reason="path escapes the output directory")
    return target


def _check_paths(root: Path, files: Sequence[RenderedFile]) -> None:
    for rendered in files:
        _target_path(root, rendered.path)


def _write_file(root: Path, rendered: RenderedFile) -> None:
    target = _target_path(root, rendered.path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(rendered.content)
    except OSError as exc:
        raise WriteError(rendered.path, exc) from exc
    logger.debug("Wrote %s: %s", rendered.kind.value.upper(), rendered.path)


def copy_static_files(
    static_dir: Optional[str],
    names: Iterable[str],
    dest_dir: str,
) -> List[str]:
    """Copy each of *names* from *static_dir* into *dest_dir* if it exists.

    Missing files are skipped silently.  Returns the names that were copied.
    """
    if not static_dir:
        return []
    copied: List[str] = []
    for name in names:
        source = os.path.join(static_dir, name)
        if not os.path.isfile(source):
            logger.debug("Static file not present, skipping: %s", source)
            continue
        try:
            shutil.copyfile(source, os.path.join(dest_dir, name))
        except OSError as exc:
            raise WriteError(name, exc) from exc
        logger.info("Copied static file: %s", name)
        copied.append(name)
    return copied


def check_output_dir(output_dir: str, protected_paths: Iterable[str]) -> None:
    """Refuse an *output_dir* that is, or contains, any of *protected_paths*.

    The output directory is deleted and replaced on every build, so it must
    never hold the working directory, the registry file or the static files.
    """
    target = Path(os.path.realpath(output_dir))
    for protected in protected_paths:
        resolved = Path(os.path.realpath(protected))
        if resolved == target or resolved.is_relative_to(target):
            raise WriteError(
                output_dir,
                reason=f"replacing it would delete {protected}; choose a dedicated output directory",
            )


def _swap_into_place(staging: str, output_dir: str) -> None:
    try:
        # mkdtemp creates the directory owner-only; published trees are world-readable
        os.chmod(staging, 0o755)
        if os.path.isdir(output_dir):
            shutil.rmtree(output_dir)
        elif os.path.lexists(output_dir):
            os.unlink(output_dir)
        os.replace(staging, output_dir)
    except OSError as exc:
        raise WriteError(output_dir, exc) from exc


def write_site(
    files: Sequence[RenderedFile],
    output_dir: str,
    *,
    static_dir: Optional[str] = None,
    static_files: Iterable[str] = (),
    protected_paths: Iterable[str] = (),
) -> WriteResult:
    """Materialise *files* as a fresh tree at *output_dir*.

    Any previous content of *output_dir* is replaced wholesale.  When
    *output_dir* is a symlink the link is kept and the directory it points
    to is replaced.  The working directory, *static_dir* and every entry of
    *protected_paths* must lie outside *output_dir*.

    Raises:
        WriteError: *output_dir* would swallow a protected path, a target
            path escapes the output directory, or any filesystem operation
            fails.  The previous *output_dir* is left as it was and the
            staging directory is removed.
    """
    output_dir = os.path.abspath(output_dir)
    protected = [os.getcwd(), *protected_paths]
    if static_dir:
        protected.append(static_dir)
    check_output_dir(output_dir, protected)

    target_dir = os.path.realpath(output_dir)
    if target_dir != output_dir:
        logger.debug("Output %s resolves to %s", output_dir, target_dir)
    parent = os.path.dirname(target_dir)

    try:
        os.makedirs(parent, exist_ok=True)
        staging = tempfile.mkdtemp(
            prefix=f".{os.path.basename(target_dir)}.staging-", dir=parent
        )
    except OSError as exc:
        raise WriteError(output_dir, exc) from exc

    logger.debug("Staging output in %s", staging)
    try:
        root = Path(staging).resolve()
        _check_paths(root, files)
        for rendered in files:
            _write_file(root, rendered)
        copied = copy_static_files(static_dir, static_files, staging)
        _swap_into_place(staging, target_dir)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    result = WriteResult(
        output_dir=output_dir,
        json_files=sum(1 for f in files if f.kind is ContentKind.JSON),
        html_files=sum(1 for f in files if f.kind is ContentKind.HTML),
        copied_files=tuple(copied),
    )
    logger.info("Wrote %d file(s) to %s", result.total_files, output_dir)
    return result
