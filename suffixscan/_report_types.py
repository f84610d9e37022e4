"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

# Suffix -> member type names in first-encountered order.
GroupMap = dict[str, list[str]]

# Suffix -> (scan index, type name) pairs built from one partition of the scan.
IndexedGroupMap = dict[str, list[tuple[int, str]]]
