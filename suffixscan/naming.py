"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .contracts import NESTED_TYPE_MARKER

logger = logging.getLogger(__name__)


def _is_ascii_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def has_uppercase(name: str) -> bool:
    return any(_is_ascii_upper(ch) for ch in name)


def is_conventional(name: str) -> bool:
    """Top-level type names only: no nested marker, at least one capital."""
    return NESTED_TYPE_MARKER not in name and has_uppercase(name)


def filter_names(names: Iterable[str]) -> list[str]:
    return [name for name in names if is_conventional(name)]


def suffix(name: str) -> str:
    """
    Return the naming-convention suffix of ``name``.

    The suffix starts at the rightmost ASCII capital, so
    ``org.pkg.ResourcePatternResolver`` yields ``Resolver``. A name without
    any capital is returned unchanged.
    """
    for i in range(len(name) - 1, -1, -1):
        if _is_ascii_upper(name[i]):
            return name[i:]
    logger.warning("Type name has no uppercase letter: %r", name)
    return name
