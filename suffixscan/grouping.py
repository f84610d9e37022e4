"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ._report_types import GroupMap, IndexedGroupMap
from .naming import suffix


def build_suffix_groups(names: Iterable[str]) -> GroupMap:
    groups: GroupMap = {}
    for name in names:
        groups.setdefault(suffix(name), []).append(name)
    return groups


def build_indexed_groups(items: Iterable[tuple[int, str]]) -> IndexedGroupMap:
    """Group one partition of ``(scan index, name)`` pairs by suffix."""
    groups: IndexedGroupMap = {}
    for index, name in items:
        groups.setdefault(suffix(name), []).append((index, name))
    return groups


def merge_indexed_groups(
    parts: Iterable[Mapping[str, Sequence[tuple[int, str]]]],
) -> GroupMap:
    """
    Merge per-partition groups back into a single encounter-ordered map.

    Members are ordered by scan index and suffixes by the index of their
    first member, so the result equals ``build_suffix_groups`` over the
    names in index order, however the indices were spread over partitions.
    """
    tagged: IndexedGroupMap = {}
    for part in parts:
        for key, members in part.items():
            tagged.setdefault(key, []).extend(members)

    ordered = sorted(
        ((key, sorted(members)) for key, members in tagged.items() if members),
        key=lambda item: item[1][0][0],
    )
    return {key: [name for _, name in members] for key, members in ordered}
