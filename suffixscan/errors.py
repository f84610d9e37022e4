"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class SuffixScanError(Exception):
    """Base exception for SuffixScan."""


class ValidationError(SuffixScanError):
    """Input validation failed."""


class CollectorError(SuffixScanError):
    """The collector could not be set up."""


class MetadataReadError(SuffixScanError):
    """Class file metadata is malformed or truncated."""

    __slots__ = ("offset",)

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
