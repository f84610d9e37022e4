"""
SuffixScan — naming-convention survey for JVM classpaths.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Final

from .errors import MetadataReadError

CLASS_MAGIC: Final = 0xCAFEBABE

# =========================
# Constant pool layout
# =========================

TAG_UTF8: Final = 1
TAG_CLASS: Final = 7
TAG_LONG: Final = 5
TAG_DOUBLE: Final = 6

# tag -> payload size in bytes, for every fixed-size entry
_FIXED_ENTRY_SIZES: Final[dict[int, int]] = {
    3: 4,  # Integer
    4: 4,  # Float
    TAG_LONG: 8,
    TAG_DOUBLE: 8,
    TAG_CLASS: 2,
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}

_U2 = struct.Struct(">H")
_HEADER = struct.Struct(">IHHH")


@dataclass(frozen=True, slots=True)
class ClassMetadata:
    name: str
    major_version: int
    minor_version: int
    access_flags: int


class _Reader:
    __slots__ = ("data", "pos")

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise MetadataReadError(
                f"Truncated class file: need {size} bytes at offset {self.pos}",
                offset=self.pos,
            )
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def u1(self) -> int:
        return self.take(1)[0]

    def u2(self) -> int:
        value: int = _U2.unpack(self.take(2))[0]
        return value


def decode_modified_utf8(raw: bytes) -> str:
    """
    Decode a constant pool Utf8 payload.

    Class files store NUL as ``C0 80`` and supplementary characters as
    surrogate pairs, so plain UTF-8 decoding is not enough.
    """
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    return text.encode("utf-16", "surrogatepass").decode("utf-16")


def _read_constant_pool(reader: _Reader, count: int) -> dict[int, tuple[int, object]]:
    pool: dict[int, tuple[int, object]] = {}
    index = 1
    while index < count:
        offset = reader.pos
        tag = reader.u1()
        if tag == TAG_UTF8:
            length = reader.u2()
            raw = reader.take(length)
            try:
                pool[index] = (tag, decode_modified_utf8(raw))
            except UnicodeError as e:
                raise MetadataReadError(
                    f"Invalid Utf8 constant #{index}: {e}", offset=offset
                ) from e
        elif tag == TAG_CLASS:
            pool[index] = (tag, reader.u2())
        elif tag in _FIXED_ENTRY_SIZES:
            reader.take(_FIXED_ENTRY_SIZES[tag])
            pool[index] = (tag, None)
        else:
            raise MetadataReadError(
                f"Unknown constant pool tag {tag} at entry #{index}", offset=offset
            )
        # Long and Double take two pool slots
        index += 2 if tag in (TAG_LONG, TAG_DOUBLE) else 1
    return pool


def _resolve_class_name(pool: dict[int, tuple[int, object]], index: int) -> str:
    entry = pool.get(index)
    if entry is None or entry[0] != TAG_CLASS:
        raise MetadataReadError(f"this_class #{index} is not a Class constant")
    name_index = entry[1]
    if not isinstance(name_index, int):
        raise MetadataReadError(f"Class constant #{index} has no name index")
    name_entry = pool.get(name_index)
    if name_entry is None or name_entry[0] != TAG_UTF8:
        raise MetadataReadError(f"Class name #{name_index} is not a Utf8 constant")
    internal_name = name_entry[1]
    if not isinstance(internal_name, str):
        raise MetadataReadError(f"Class name #{name_index} is not text")
    return internal_name.replace("/", ".")


def read_class_metadata(data: bytes) -> ClassMetadata:
    if len(data) < _HEADER.size:
        raise MetadataReadError(
            f"Truncated class file: {len(data)} bytes", offset=len(data)
        )
    magic, minor, major, pool_count = _HEADER.unpack_from(data)
    if magic != CLASS_MAGIC:
        raise MetadataReadError(f"Bad magic 0x{magic:08X}", offset=0)

    reader = _Reader(data)
    reader.pos = _HEADER.size
    pool = _read_constant_pool(reader, pool_count)
    access_flags = reader.u2()
    this_class = reader.u2()

    return ClassMetadata(
        name=_resolve_class_name(pool, this_class),
        major_version=major,
        minor_version=minor,
        access_flags=access_flags,
    )


def read_class_name(data: bytes) -> str:
    """Return the dotted binary name of the type defined by ``data``."""
    return read_class_metadata(data).name
