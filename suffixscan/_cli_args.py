"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse
from typing import cast

from . import ui_messages as ui
from .contracts import DEFAULT_MAX_RESOURCES, cli_help_epilog


class _HelpFormatter(
    argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter
):
    def _get_help_string(self, action: argparse.Action) -> str:
        if action.dest in {"patterns", "classpath", "json_out"}:
            return action.help or ""
        return cast(str, super()._get_help_string(action))


def build_parser(version: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="suffixscan",
        description=(
            "Report the most common type naming conventions on a JVM classpath, "
            "one representative type per suffix, most frequent first."
        ),
        epilog=cli_help_epilog(),
        formatter_class=_HelpFormatter,
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help=ui.HELP_PATTERNS,
    )
    core_group.add_argument(
        "--classpath",
        "-cp",
        dest="classpath",
        metavar="PATHS",
        default=None,
        help=ui.HELP_CLASSPATH,
    )

    tune_group = ap.add_argument_group("Scan Tuning")
    tune_group.add_argument(
        "--processes",
        type=int,
        default=1,
        help=ui.HELP_PROCESSES,
    )
    tune_group.add_argument(
        "--max-resources",
        type=int,
        default=DEFAULT_MAX_RESOURCES,
        metavar="N",
        help=ui.HELP_MAX_RESOURCES,
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--summary",
        action="store_true",
        help=ui.HELP_SUMMARY,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--quiet",
        action="store_true",
        help=ui.HELP_QUIET,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
