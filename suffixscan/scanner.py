"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import logging
import os
import re
import zipfile
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from .contracts import DEFAULT_MAX_RESOURCES
from .errors import ValidationError

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".jar", ".zip")

KIND_DIR = "dir"
KIND_ARCHIVE = "archive"

PREFIX_ALL_ROOTS = "classpath*:"
PREFIX_FIRST_ROOT = "classpath:"

SENSITIVE_DIRS = {
    "/proc",
    "/sys",
    "/dev",
}

_WILDCARD_CHARS = frozenset("*?")


@dataclass(frozen=True, slots=True)
class ClassRoot:
    path: Path
    kind: str


@dataclass(frozen=True, slots=True)
class Resource:
    """One class file entry: a file under a directory root or an archive member."""

    root: str
    entry: str
    kind: str

    @property
    def location(self) -> str:
        if self.kind == KIND_ARCHIVE:
            return f"{self.root}!/{self.entry}"
        return str(Path(self.root, self.entry))

    @property
    def stat_path(self) -> str:
        """Filesystem path whose stat signature identifies this resource."""
        if self.kind == KIND_ARCHIVE:
            return self.root
        return str(Path(self.root, self.entry))


@dataclass(frozen=True, slots=True)
class PatternSpec:
    expression: str
    glob: str
    all_roots: bool
    regex: re.Pattern[str]

    @property
    def literal_prefix(self) -> tuple[str, ...]:
        """Leading path segments that contain no wildcard."""
        prefix: list[str] = []
        segments = self.glob.split("/")
        for segment in segments[:-1]:
            if _WILDCARD_CHARS & set(segment):
                break
            prefix.append(segment)
        return tuple(prefix)


def split_classpath(value: str) -> list[str]:
    return [part for part in value.split(os.pathsep) if part.strip()]


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """
    Translate an Ant-style glob into an anchored regex.

    ``**`` matches zero or more whole path segments, ``*`` matches within one
    segment and ``?`` matches a single character within one segment.
    """
    parts = glob.split("/")
    out: list[str] = []
    for i, part in enumerate(parts):
        last = i == len(parts) - 1
        if part == "**":
            out.append(".*" if last else "(?:[^/]+/)*")
            continue
        segment = "".join(
            "[^/]*" if ch == "*" else "[^/]" if ch == "?" else re.escape(ch)
            for ch in part
        )
        out.append(segment if last else segment + "/")
    return re.compile("".join(out))


def parse_pattern(expression: str) -> PatternSpec:
    text = expression.strip()
    all_roots = True
    if text.startswith(PREFIX_ALL_ROOTS):
        text = text[len(PREFIX_ALL_ROOTS) :]
    elif text.startswith(PREFIX_FIRST_ROOT):
        text = text[len(PREFIX_FIRST_ROOT) :]
        all_roots = False

    # Entry paths are relative to a root, so "." and empty segments never match.
    glob = "/".join(part for part in text.split("/") if part not in ("", "."))
    if not glob:
        raise ValidationError(f"Empty location pattern: '{expression}'")

    return PatternSpec(
        expression=expression,
        glob=glob,
        all_roots=all_roots,
        regex=glob_to_regex(glob),
    )


def _check_sensitive(path: Path, original: str) -> None:
    path_str = str(path)
    if path_str in SENSITIVE_DIRS:
        raise ValidationError(f"Cannot scan sensitive directory: {original}")
    for sensitive in SENSITIVE_DIRS:
        if path_str.startswith(sensitive + "/"):
            raise ValidationError(f"Cannot scan under sensitive directory: {original}")


def resolve_root(root: str) -> ClassRoot:
    try:
        rootp = Path(root).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Invalid classpath root '{root}': {e}") from e

    _check_sensitive(rootp, root)

    if rootp.is_dir():
        return ClassRoot(path=rootp, kind=KIND_DIR)
    if rootp.is_file() and rootp.suffix.lower() in ARCHIVE_SUFFIXES:
        return ClassRoot(path=rootp, kind=KIND_ARCHIVE)
    raise ValidationError(
        f"Classpath root must be a directory or a .jar/.zip archive: {root}"
    )


def resolve_roots(roots: Iterable[str]) -> list[ClassRoot]:
    resolved = [resolve_root(root) for root in roots]
    if not resolved:
        raise ValidationError("Classpath is empty.")
    return resolved


def _iter_dir_entries(root: ClassRoot, pattern: PatternSpec) -> list[str]:
    base = root.path.joinpath(*pattern.literal_prefix)
    if not base.is_dir():
        return []

    entries: list[str] = []
    for p in base.rglob("*"):
        # Verify path is actually under root (prevent symlink escapes)
        try:
            p.resolve().relative_to(root.path)
        except (OSError, ValueError):
            continue
        if not p.is_file():
            continue
        rel = p.relative_to(root.path).as_posix()
        if pattern.regex.fullmatch(rel):
            entries.append(rel)
    return sorted(entries)


def _iter_archive_entries(root: ClassRoot, pattern: PatternSpec) -> list[str]:
    try:
        with zipfile.ZipFile(root.path) as archive:
            names = archive.namelist()
    except (OSError, zipfile.BadZipFile) as e:
        logger.warning("Skipping unreadable archive %s: %s", root.path, e)
        return []
    return sorted(
        name
        for name in names
        if not name.endswith("/") and pattern.regex.fullmatch(name)
    )


def _matching_entries(root: ClassRoot, pattern: PatternSpec) -> list[str]:
    if root.kind == KIND_ARCHIVE:
        return _iter_archive_entries(root, pattern)
    return _iter_dir_entries(root, pattern)


def iter_resources(
    roots: Sequence[ClassRoot],
    patterns: Sequence[PatternSpec],
    *,
    max_resources: int = DEFAULT_MAX_RESOURCES,
) -> Iterator[Resource]:
    """
    Yield resources for every pattern, in pattern order then classpath order.

    A resource matched by several patterns is yielded once per pattern.
    """
    count = 0
    for pattern in patterns:
        for root in roots:
            entries = _matching_entries(root, pattern)
            for entry in entries:
                count += 1
                if count > max_resources:
                    raise ValidationError(
                        f"Resource count exceeds limit of {max_resources}. "
                        "Use a more specific pattern or increase the limit."
                    )
                yield Resource(root=str(root.path), entry=entry, kind=root.kind)
            if entries and not pattern.all_roots:
                break


def read_resource_bytes(
    resource: Resource, *, archive: zipfile.ZipFile | None = None
) -> bytes:
    if resource.kind == KIND_ARCHIVE:
        if archive is not None:
            return archive.read(resource.entry)
        with zipfile.ZipFile(resource.root) as opened:
            return opened.read(resource.entry)
    return Path(resource.root, resource.entry).read_bytes()
