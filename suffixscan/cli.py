from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_paths import _validate_output_path, classpath_roots
from ._cli_summary import _print_summary
from .cache import MetadataCache
from .collector import Collector
from .contracts import DEBUG_ENV, DEFAULT_PATTERNS, ExitCode
from .errors import CollectorError, ValidationError
from .report import build_groups, report, to_json_report

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)

LOGGER_NAME = "suffixscan"


def _make_console(*, no_color: bool) -> Console:
    # stdout is reserved for report lines
    return Console(theme=custom_theme, width=100, no_color=no_color, stderr=True)


console = _make_console(no_color=False)


def _configure_logging(*, quiet: bool, debug: bool) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=debug,
    )
    logger.addHandler(handler)
    logger.propagate = False
    if debug:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.ERROR)
    else:
        logger.setLevel(logging.WARNING)


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get(DEBUG_ENV) == "1"
    return debug_from_flag or debug_from_env


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_args()

    global console
    console = _make_console(no_color=args.no_color)
    _configure_logging(quiet=args.quiet, debug=_is_debug_enabled())

    json_out_path: Path | None = None
    if args.json_out:
        json_out_path = _validate_output_path(
            args.json_out,
            expected_suffix=".json",
            label="JSON",
            console=console,
            invalid_message=ui.fmt_invalid_output_extension,
        )

    # Collection phase
    try:
        collector = Collector(
            classpath_roots(args.classpath),
            args.patterns or DEFAULT_PATTERNS,
            cache=MetadataCache(),
            processes=args.processes,
            max_resources=args.max_resources,
        )
    except (ValidationError, CollectorError) as e:
        console.print(ui.fmt_contract_error(ui.fmt_invalid_collector(e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    try:
        collected = collector.collect()
    except (ValidationError, OSError) as e:
        console.print(ui.fmt_contract_error(ui.fmt_scan_failed(e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    # Analysis phase
    groups = build_groups(collected.names)
    names_kept = sum(len(members) for members in groups.values())

    # Reporting
    entries = report(groups, sys.stdout)
    sys.stdout.flush()

    if json_out_path:
        meta = {
            "suffixscan_version": __version__,
            "classpath": [str(root.path) for root in collector.roots],
            "patterns": [pattern.expression for pattern in collector.patterns],
            "resources_found": collected.stats.resources_found,
            "resources_skipped": collected.stats.resources_failed,
            "names_kept": names_kept,
        }
        try:
            json_out_path.parent.mkdir(parents=True, exist_ok=True)
            json_out_path.write_text(to_json_report(entries, meta), "utf-8")
        except OSError as e:
            console.print(
                ui.fmt_contract_error(
                    ui.fmt_report_write_failed(
                        label="JSON", path=json_out_path, error=e
                    )
                )
            )
            sys.exit(ExitCode.CONTRACT_ERROR)
        if not args.quiet:
            console.print(ui.fmt_path(ui.INFO_JSON_REPORT_SAVED, json_out_path))

    if args.summary:
        stats = collected.stats
        _print_summary(
            console=console,
            resources_found=stats.resources_found,
            resources_read=stats.resources_read,
            cache_hits=stats.cache_hits,
            resources_skipped=stats.resources_failed,
            names_kept=names_kept,
            names_filtered=len(collected.names) - names_kept,
            groups_count=len(groups),
        )


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except Exception as e:
        console.print(ui.fmt_internal_error(e, debug=_is_debug_enabled()))
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
