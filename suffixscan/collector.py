"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from contextlib import ExitStack
from dataclasses import dataclass, field

from .cache import MetadataCache
from .classfile import read_class_name
from .contracts import DEFAULT_MAX_RESOURCES, DEFAULT_PATTERNS
from .errors import CollectorError, MetadataReadError, ValidationError
from .scanner import (
    KIND_ARCHIVE,
    ClassRoot,
    PatternSpec,
    Resource,
    iter_resources,
    parse_pattern,
    read_resource_bytes,
    resolve_roots,
)

logger = logging.getLogger(__name__)

BATCH_SIZE = 100

# Stands in for a resource whose type name could not be read.
PLACEHOLDER_NAME = ""


@dataclass(slots=True)
class ReadResult:
    """Result of reading the type name of a single resource."""

    resource: Resource
    success: bool
    name: str | None = None
    error: str | None = None
    error_kind: str | None = None


@dataclass(slots=True)
class CollectStats:
    resources_found: int = 0
    resources_read: int = 0
    cache_hits: int = 0
    resources_failed: int = 0


@dataclass(slots=True)
class CollectResult:
    names: list[str]
    stats: CollectStats
    failures: list[ReadResult] = field(default_factory=list)


def read_resource(
    resource: Resource, *, archive: zipfile.ZipFile | None = None
) -> ReadResult:
    """
    Read the type name of one class file resource.

    Never raises: every failure is reported through the returned
    ReadResult with an ``error_kind`` of ``read_error``,
    ``metadata_error`` or ``unexpected_error``.
    """
    try:
        try:
            data = read_resource_bytes(resource, archive=archive)
        except (OSError, KeyError, zipfile.BadZipFile) as e:
            return ReadResult(
                resource=resource,
                success=False,
                error=f"Cannot read resource: {e}",
                error_kind="read_error",
            )

        try:
            name = read_class_name(data)
        except MetadataReadError as e:
            return ReadResult(
                resource=resource,
                success=False,
                error=f"Invalid class metadata: {e}",
                error_kind="metadata_error",
            )

        return ReadResult(resource=resource, success=True, name=name)

    except Exception as e:
        return ReadResult(
            resource=resource,
            success=False,
            error=f"Unexpected error: {type(e).__name__}: {e}",
            error_kind="unexpected_error",
        )


class Collector:
    """
    Produces the raw type names visible on a classpath.

    Construction validates the classpath and the location patterns; a
    collector that cannot be built is fatal for the run. Reading is
    fail-soft: each unreadable resource becomes an empty placeholder name.
    """

    __slots__ = ("cache", "max_resources", "patterns", "processes", "roots")

    def __init__(
        self,
        roots: Sequence[str],
        patterns: Sequence[str] = DEFAULT_PATTERNS,
        *,
        cache: MetadataCache | None = None,
        processes: int = 1,
        max_resources: int = DEFAULT_MAX_RESOURCES,
    ):
        if processes < 1:
            raise CollectorError(f"Process count must be positive: {processes}")
        if max_resources < 0:
            raise CollectorError(
                f"Resource limit must be non-negative: {max_resources}"
            )
        if not patterns:
            raise ValidationError("No location patterns given.")

        self.roots: list[ClassRoot] = resolve_roots(roots)
        self.patterns: list[PatternSpec] = [parse_pattern(p) for p in patterns]
        self.cache = MetadataCache() if cache is None else cache
        self.processes = processes
        self.max_resources = max_resources

    def resources(self) -> list[Resource]:
        return list(
            iter_resources(
                self.roots, self.patterns, max_resources=self.max_resources
            )
        )

    def collect(self) -> CollectResult:
        resources = self.resources()
        stats = CollectStats(resources_found=len(resources))
        names: list[str] = [PLACEHOLDER_NAME] * len(resources)

        pending: list[int] = []
        aliases: dict[int, int] = {}
        first_seen: dict[str, int] = {}
        for i, resource in enumerate(resources):
            cached = self.cache.get(resource)
            if cached is not None:
                stats.cache_hits += 1
                names[i] = cached
                continue
            # Same resource matched by several patterns: read it once.
            first = first_seen.setdefault(resource.location, i)
            if first != i:
                aliases[i] = first
                continue
            pending.append(i)

        results = self._read_all(resources, pending)

        failures: list[ReadResult] = []
        for i in pending:
            result = results[i]
            if result.success and result.name is not None:
                self.cache.put(result.resource, result.name)
                names[i] = result.name
                stats.resources_read += 1
            else:
                stats.resources_failed += 1
                failures.append(result)
                logger.warning(
                    "Skipping resource %s: %s", result.resource.location, result.error
                )

        for i, first in aliases.items():
            names[i] = names[first]
            if results[first].success:
                stats.cache_hits += 1
            else:
                stats.resources_failed += 1

        return CollectResult(names=names, stats=stats, failures=failures)

    def _read_all(
        self, resources: Sequence[Resource], pending: Sequence[int]
    ) -> dict[int, ReadResult]:
        if not pending:
            return {}
        if self.processes > 1 and len(pending) > 1:
            try:
                return self._read_parallel(resources, pending)
            except (OSError, RuntimeError) as e:
                logger.warning(
                    "Parallel reading unavailable, falling back to sequential: %s", e
                )
        return self._read_sequential(resources, pending)

    def _read_sequential(
        self, resources: Sequence[Resource], pending: Sequence[int]
    ) -> dict[int, ReadResult]:
        results: dict[int, ReadResult] = {}
        archives: dict[str, zipfile.ZipFile | None] = {}
        with ExitStack() as stack:
            for i in pending:
                resource = resources[i]
                archive = None
                if resource.kind == KIND_ARCHIVE:
                    if resource.root not in archives:
                        try:
                            archives[resource.root] = stack.enter_context(
                                zipfile.ZipFile(resource.root)
                            )
                        except (OSError, zipfile.BadZipFile):
                            # read_resource reopens it and reports the error
                            archives[resource.root] = None
                    archive = archives[resource.root]
                results[i] = read_resource(resource, archive=archive)
        return results

    def _read_parallel(
        self, resources: Sequence[Resource], pending: Sequence[int]
    ) -> dict[int, ReadResult]:
        # Results are keyed by resource index, so completion order is irrelevant.
        results: dict[int, ReadResult] = {}
        with ProcessPoolExecutor(max_workers=self.processes) as executor:
            for start in range(0, len(pending), BATCH_SIZE):
                batch = pending[start : start + BATCH_SIZE]
                futures: list[Future[ReadResult]] = [
                    executor.submit(read_resource, resources[i]) for i in batch
                ]
                future_to_index = {
                    id(fut): i for fut, i in zip(futures, batch, strict=True)
                }
                for future in as_completed(futures):
                    i = future_to_index[id(future)]
                    try:
                        results[i] = future.result()
                    except Exception as e:
                        results[i] = ReadResult(
                            resource=resources[i],
                            success=False,
                            error=f"Worker failed: {e}",
                            error_kind="worker_error",
                        )
        return results
