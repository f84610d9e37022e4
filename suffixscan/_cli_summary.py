"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_RESOURCES_SKIPPED:
        return "bold red"
    if label == ui.SUMMARY_LABEL_GROUPS:
        return "bold yellow"
    return "bold"


def _build_summary_rows(
    *,
    resources_found: int,
    resources_read: int,
    cache_hits: int,
    resources_skipped: int,
    names_kept: int,
    names_filtered: int,
    groups_count: int,
) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_RESOURCES_FOUND, resources_found),
        (ui.SUMMARY_LABEL_RESOURCES_READ, resources_read),
        (ui.SUMMARY_LABEL_CACHE_HITS, cache_hits),
        (ui.SUMMARY_LABEL_RESOURCES_SKIPPED, resources_skipped),
        (ui.SUMMARY_LABEL_NAMES_KEPT, names_kept),
        (ui.SUMMARY_LABEL_NAMES_FILTERED, names_filtered),
        (ui.SUMMARY_LABEL_GROUPS, groups_count),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(
    *,
    console: Console,
    resources_found: int,
    resources_read: int,
    cache_hits: int,
    resources_skipped: int,
    names_kept: int,
    names_filtered: int,
    groups_count: int,
) -> None:
    invariant_ok = resources_found == (resources_read + cache_hits + resources_skipped)
    rows = _build_summary_rows(
        resources_found=resources_found,
        resources_read=resources_read,
        cache_hits=cache_hits,
        resources_skipped=resources_skipped,
        names_kept=names_kept,
        names_filtered=names_filtered,
        groups_count=groups_count,
    )
    console.print(_build_summary_table(rows))

    if not invariant_ok:
        console.print(f"[warning]{ui.WARN_SUMMARY_ACCOUNTING_MISMATCH}[/warning]")
