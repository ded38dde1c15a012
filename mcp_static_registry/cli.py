"""CLI argument parsing and main entry point.

Provides two commands:

* ``mcp-static-registry build``: generate the static API tree.
* ``mcp-static-registry validate``: load and validate the registry only.

Every :class:`~mcp_static_registry.errors.RegistryBuildError` raised by the
pipeline ends up here, where it becomes a diagnostic on stderr and exit
status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp_static_registry.builder import build_site, check_registry
from mcp_static_registry.config.loader import resolve_build_config, validate_config_data
from mcp_static_registry.config.schema import RENDER_PRESETS, BuildConfig
from mcp_static_registry.constants import APP_NAME, APP_VERSION, CONFIG_ENV_VAR
from mcp_static_registry.display.console import (
    disp_build_summary,
    disp_error,
    disp_validation_ok,
    gen_build_info,
    log_build_summary,
)
from mcp_static_registry.display.logging_config import VALID_LEVELS, setup_logging
from mcp_static_registry.errors import RegistryBuildError

module_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


# ── Config resolution ────────────────────────────────────────────────────


def apply_cli_overrides(config: BuildConfig, args: argparse.Namespace) -> BuildConfig:
    """Return *config* with command-line flags applied on top.

    ``--preset`` replaces the file's render settings; the ``--no-*``
    flags are applied after it.  The result is re-validated.
    """
    data: Dict[str, Any] = config.model_dump()

    if getattr(args, "input", None):
        data["input"] = args.input
    if getattr(args, "output", None):
        data["output_dir"] = args.output
    if getattr(args, "api_base", None):
        data["api_base"] = args.api_base

    render = data["render"]
    preset = getattr(args, "preset", None)
    if preset:
        render = {"preset": preset}
    if getattr(args, "no_html", False):
        render["emit_html"] = False
    if getattr(args, "no_bare_server_path", False):
        render["include_bare_server_path"] = False
    if getattr(args, "no_wrap", False):
        render["wrap_detail_responses"] = False
    data["render"] = render

    if getattr(args, "allow_duplicate_ids", False):
        data["validation"]["require_unique_ids"] = False

    return validate_config_data(data)


def _load_config(args: argparse.Namespace) -> BuildConfig:
    config = resolve_build_config(getattr(args, "config", None))
    return apply_cli_overrides(config, args)


# ── ``mcp-static-registry build`` ────────────────────────────────────────


def _cmd_build(args: argparse.Namespace) -> int:
    """Entry-point for ``mcp-static-registry build``."""
    config = _load_config(args)
    report = build_site(config)

    build_info = gen_build_info(config, report)
    log_build_summary(build_info, logging.DEBUG)
    if not args.quiet:
        disp_build_summary(build_info)
    return EXIT_OK


# ── ``mcp-static-registry validate`` ─────────────────────────────────────


def _cmd_validate(args: argparse.Namespace) -> int:
    """Entry-point for ``mcp-static-registry validate``."""
    config = _load_config(args)
    registry = check_registry(config)
    disp_validation_ok(config, registry)
    return EXIT_OK


# ── CLI parser construction ──────────────────────────────────────────────


def _add_common_arguments(sp: argparse.ArgumentParser) -> None:
    sp.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help=(
            "Path to the build configuration (YAML). "
            f"Default: ${CONFIG_ENV_VAR}, then registry-build.yaml/.yml if present"
        ),
    )
    sp.add_argument(
        "-i",
        "--input",
        type=str,
        default=None,
        metavar="PATH",
        help="Registry JSON file (default: mcp-registry.json)",
    )
    sp.add_argument(
        "--allow-duplicate-ids",
        action="store_true",
        default=False,
        help="Warn instead of failing when two servers share an id",
    )
    sp.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=[lvl.lower() for lvl in VALID_LEVELS],
        help="Set logging level (default: info)",
    )
    sp.add_argument(
        "--log-file",
        type=str,
        default=None,
        metavar="PATH",
        help="Also write log records to this file",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with build/validate subcommands."""
    parser = argparse.ArgumentParser(
        prog="mcp-static-registry",
        description=f"{APP_NAME} v{APP_VERSION}",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # ── build ───────────────────────────────────────────────────
    sp_build = subparsers.add_parser(
        "build",
        help="Generate the static API tree from the registry file",
    )
    _add_common_arguments(sp_build)
    sp_build.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Output directory, replaced on every build (default: dist)",
    )
    sp_build.add_argument(
        "--api-base",
        type=str,
        default=None,
        metavar="SEGMENT",
        help="API version path segment (default: v0.1)",
    )
    sp_build.add_argument(
        "--preset",
        type=str,
        default=None,
        choices=sorted(RENDER_PRESETS),
        help="Rendering preset (overrides the config file's render settings)",
    )
    sp_build.add_argument(
        "--no-html",
        action="store_true",
        default=False,
        help="Do not render HTML mirrors beside the JSON documents",
    )
    sp_build.add_argument(
        "--no-bare-server-path",
        action="store_true",
        default=False,
        help="Do not emit the unwrapped /servers/{id}/ endpoint",
    )
    sp_build.add_argument(
        "--no-wrap",
        action="store_true",
        default=False,
        help="Serve raw server records from the version endpoints",
    )
    sp_build.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Do not print the build summary",
    )
    sp_build.set_defaults(func=_cmd_build)

    # ── validate ────────────────────────────────────────────────
    sp_validate = subparsers.add_parser(
        "validate",
        help="Load and validate the registry file without writing anything",
    )
    _add_common_arguments(sp_validate)
    sp_validate.set_defaults(func=_cmd_validate)

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse *argv*, run the selected command, and return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_FAILURE

    setup_logging(args.log_level, log_file=args.log_file)
    module_logger.debug("---- %s v%s: %s ----", APP_NAME, APP_VERSION, args.command)

    try:
        return args.func(args)
    except RegistryBuildError as e_build:
        module_logger.debug("Build aborted: %s", e_build, exc_info=True)
        disp_error(e_build)
        return EXIT_FAILURE
    except Exception as e_fatal:
        module_logger.exception(
            "%s encountered an uncaught fatal error: %s",
            APP_NAME,
            e_fatal,
        )
        disp_error(e_fatal)
        return EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> None:
    """Program entry point: parse arguments, dispatch, and exit."""
    sys.exit(run(argv))
