"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

from rich.console import Console

from .contracts import CLASSPATH_ENV, ExitCode
from .scanner import split_classpath
from .ui_messages import fmt_contract_error


def classpath_roots(
    value: str | None, *, environ: Mapping[str, str] | None = None
) -> list[str]:
    """Roots from --classpath, else $CLASSPATH, else the current directory."""
    if value:
        roots = split_classpath(value)
        if roots:
            return roots
    env = os.environ if environ is None else environ
    return split_classpath(env.get(CLASSPATH_ENV, "")) or ["."]


def _validate_output_path(
    path: str,
    *,
    expected_suffix: str,
    label: str,
    console: Console,
    invalid_message: Callable[..., str],
) -> Path:
    out = Path(path).expanduser()
    if out.suffix.lower() != expected_suffix:
        console.print(
            fmt_contract_error(
                invalid_message(label=label, path=out, expected_suffix=expected_suffix)
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)
    return out.resolve()
