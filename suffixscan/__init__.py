"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("suffixscan")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__"]
