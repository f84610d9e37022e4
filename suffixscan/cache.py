"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import os
from typing import TypedDict

from .scanner import Resource


class FileStat(TypedDict):
    mtime_ns: int
    size: int


CacheKey = tuple[str, int, int]


def file_stat_signature(path: str) -> FileStat:
    st = os.stat(path)
    return {
        "mtime_ns": st.st_mtime_ns,
        "size": st.st_size,
    }


class MetadataCache:
    """
    In-memory type name cache for a single invocation.

    Entries are keyed by resource location and the stat signature of the
    backing file, so a resource rewritten mid-run is read again. Nothing is
    written to disk.
    """

    __slots__ = ("_entries", "hits", "misses")

    def __init__(self) -> None:
        self._entries: dict[CacheKey, str] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _key(resource: Resource) -> CacheKey | None:
        try:
            stat = file_stat_signature(resource.stat_path)
        except OSError:
            return None
        return (resource.location, stat["mtime_ns"], stat["size"])

    def get(self, resource: Resource) -> str | None:
        key = self._key(resource)
        name = None if key is None else self._entries.get(key)
        if name is None:
            self.misses += 1
        else:
            self.hits += 1
        return name

    def put(self, resource: Resource, name: str) -> None:
        key = self._key(resource)
        if key is not None:
            self._entries[key] = name
