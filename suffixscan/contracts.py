"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

REPORT_SCHEMA_VERSION: Final = "1.0"

DEFAULT_PATTERNS: Final[tuple[str, ...]] = ("classpath*:**/*.class",)
DEFAULT_MAX_RESOURCES: Final = 1_000_000

CLASSPATH_ENV: Final = "CLASSPATH"
DEBUG_ENV: Final = "SUFFIXSCAN_DEBUG"

NESTED_TYPE_MARKER: Final = "$"


class ExitCode(IntEnum):
    SUCCESS = 0
    CONTRACT_ERROR = 2
    INTERNAL_ERROR = 5


EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success"),
    (
        ExitCode.CONTRACT_ERROR,
        (
            "contract error (invalid classpath root, invalid output "
            "extension, resource limit exceeded)"
        ),
    ),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception; please report)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    return "\n".join(lines)
