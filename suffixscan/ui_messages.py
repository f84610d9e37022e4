from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from . import __version__

MARKER_CONTRACT_ERROR = "[error]CONTRACT ERROR:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the SuffixScan version and exit."
HELP_PATTERNS = (
    "Location patterns to scan, e.g. 'classpath*:org/springframework/**/*.class'."
)
HELP_CLASSPATH = (
    "Classpath roots (directories, .jar or .zip files) separated by the OS "
    "path separator. Default: $CLASSPATH, or the current directory."
)
HELP_PROCESSES = "Number of worker processes used to read class files."
HELP_MAX_RESOURCES = "Maximum number of class file resources to read."
HELP_JSON = "Also write the ranked groups as a JSON report to FILE."
HELP_SUMMARY = "Print a scan summary table to stderr."
HELP_NO_COLOR = "Disable ANSI colors in diagnostics."
HELP_QUIET = "Only print errors on stderr."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Scan Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_RESOURCES_FOUND = "Resources found"
SUMMARY_LABEL_RESOURCES_READ = "Resources read"
SUMMARY_LABEL_CACHE_HITS = "Cache hits"
SUMMARY_LABEL_RESOURCES_SKIPPED = "Resources skipped"
SUMMARY_LABEL_NAMES_KEPT = "Type names kept"
SUMMARY_LABEL_NAMES_FILTERED = "Type names filtered"
SUMMARY_LABEL_GROUPS = "Suffix groups"
WARN_SUMMARY_ACCOUNTING_MISMATCH = (
    "Summary accounting mismatch: "
    "resources_found != resources_read + cache_hits + resources_skipped"
)

INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"

ERR_INVALID_OUTPUT_EXT = (
    "[error]Invalid {label} output extension: {path} "
    "(expected {expected_suffix}).[/error]"
)
ERR_INVALID_COLLECTOR = "[error]Cannot set up the collector:[/error] {error}"
ERR_SCAN_FAILED = "[error]Scan failed:[/error] {error}"
ERR_REPORT_WRITE_FAILED = (
    "[error]Failed to write {label} report: {path} ({error}).[/error]"
)


def version_output(version: str) -> str:
    return f"SuffixScan {version}"


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=path, expected_suffix=expected_suffix
    )


def fmt_invalid_collector(error: object) -> str:
    return ERR_INVALID_COLLECTOR.format(error=error)


def fmt_scan_failed(error: object) -> str:
    return ERR_SCAN_FAILED.format(error=error)


def fmt_report_write_failed(*, label: str, path: Path, error: object) -> str:
    return ERR_REPORT_WRITE_FAILED.format(label=label, path=path, error=error)


def fmt_path(template: str, path: Path) -> str:
    return template.format(path=path)


def fmt_contract_error(message: str) -> str:
    return f"{MARKER_CONTRACT_ERROR}\n{message}"


def fmt_internal_error(error: BaseException, *, debug: bool = False) -> str:
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        f"Reason: {error_name}: {error_text}",
        "",
        "Next steps:",
        "- Re-run with --debug to include a traceback.",
        "- Attach: command line, SuffixScan version and Python version.",
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    command_line = shlex.join(sys.argv)
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"SuffixScan: {__version__}",
            f"Command: {command_line}",
            f"CWD: {Path.cwd()}",
            "Traceback:",
            "".join(traceback_lines).rstrip(),
        ]
    )
    return "\n".join(lines)
