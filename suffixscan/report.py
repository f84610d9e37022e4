"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Mapping, Sequence
from typing import NamedTuple, TextIO

from ._report_types import GroupMap
from .contracts import REPORT_SCHEMA_VERSION
from .grouping import build_suffix_groups
from .naming import filter_names


class ReportEntry(NamedTuple):
    suffix: str
    representative: str
    size: int


def _rank_key(item: tuple[str, Sequence[str]]) -> tuple[int, str]:
    # Larger groups first; equal sizes fall back to ascending suffix text.
    key, members = item
    return (-len(members), key)


def rank_groups(groups: Mapping[str, Sequence[str]]) -> list[ReportEntry]:
    ranked = sorted(
        ((key, members) for key, members in groups.items() if members),
        key=_rank_key,
    )
    return [
        ReportEntry(suffix=key, representative=members[0], size=len(members))
        for key, members in ranked
    ]


def write_report(entries: Iterable[ReportEntry], out: TextIO | None = None) -> None:
    stream = sys.stdout if out is None else out
    for entry in entries:
        stream.write(entry.representative + "\n")


def report(
    groups: Mapping[str, Sequence[str]], out: TextIO | None = None
) -> list[ReportEntry]:
    entries = rank_groups(groups)
    write_report(entries, out)
    return entries


def build_groups(names: Iterable[str]) -> GroupMap:
    return build_suffix_groups(filter_names(names))


def analyze(names: Iterable[str]) -> list[ReportEntry]:
    return rank_groups(build_groups(names))


def to_json_report(
    entries: Sequence[ReportEntry],
    meta: Mapping[str, object] | None = None,
) -> str:
    """
    Serialize the ranked groups as a deterministic JSON document.

    Groups keep their rank order; ``meta`` is merged into the ``meta`` block
    and always carries ``report_schema_version``.
    """
    meta_payload = dict(meta or {})
    meta_payload["report_schema_version"] = REPORT_SCHEMA_VERSION
    payload = {
        "meta": meta_payload,
        "groups": [
            {
                "suffix": entry.suffix,
                "representative": entry.representative,
                "size": entry.size,
            }
            for entry in entries
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)
