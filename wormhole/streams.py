"""Binary streams used to serialise models, workloads and progress."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO, Iterable

_SIZE = struct.Struct("<Q")

_MODES = {"r": "rb", "w": "wb", "a": "ab"}


class StreamError(IOError):
    """Raised when a stream cannot supply or accept the requested data."""


class StringStream:
    """An in-memory stream: writes append to the buffer, reads consume it from the front."""

    def __init__(self, data: bytes | bytearray = b"") -> None:
        self._buf = bytearray(data)
        self._pos = 0

    def read(self, size: int) -> bytes:
        """Return exactly ``size`` bytes, or raise StreamError if fewer remain."""
        if size < 0:
            raise ValueError("size must not be negative")
        end = self._pos + size
        if end > len(self._buf):
            raise StreamError(
                f"cannot read {size} bytes at offset {self._pos}: "
                f"only {len(self._buf) - self._pos} left"
            )
        chunk = bytes(self._buf[self._pos:end])
        self._pos = end
        return chunk

    def write(self, data: bytes | bytearray) -> None:
        self._buf.extend(data)

    def getvalue(self) -> bytes:
        """Return the whole buffer, including anything already read."""
        return bytes(self._buf)

    def write_vector(self, values: Iterable, fmt: str) -> None:
        """Write a length-prefixed array whose items use the struct code ``fmt``."""
        items = list(values)
        self.write(_SIZE.pack(len(items)))
        if items:
            self.write(struct.pack(f"<{len(items)}{fmt}", *items))

    def read_vector(self, fmt: str) -> list:
        (count,) = _SIZE.unpack(self.read(_SIZE.size))
        if not count:
            return []
        item = struct.calcsize(f"<{fmt}")
        return list(struct.unpack(f"<{count}{fmt}", self.read(count * item)))

    def write_string(self, text: str) -> None:
        """Write a length-prefixed UTF-8 string."""
        raw = text.encode("utf-8")
        self.write(_SIZE.pack(len(raw)))
        self.write(raw)

    def read_string(self) -> str:
        (count,) = _SIZE.unpack(self.read(_SIZE.size))
        return self.read(count).decode("utf-8")


def open_stream(uri: str | Path, flag: str = "r") -> BinaryIO:
    """Open a local file (optionally written as ``file://path``) in binary mode.

    ``flag`` is one of ``"r"``, ``"w"`` or ``"a"``.
    """
    if flag not in _MODES:
        raise ValueError(f"unknown stream flag {flag!r}, expected one of r, w, a")
    path = str(uri)
    if path.startswith("file://"):
        path = path[len("file://"):]
    elif "://" in path:
        protocol = path.split("://", 1)[0]
        raise StreamError(f"unsupported protocol {protocol!r} in {path!r}")
    return open(path, _MODES[flag])