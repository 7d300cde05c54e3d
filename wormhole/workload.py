"""Workloads the scheduler hands to workers, and matching of data files."""

from __future__ import annotations

import enum
import os
import re
import struct
from dataclasses import dataclass, field

from wormhole.streams import StreamError

_INT = struct.Struct("<i")
_SIZE = struct.Struct("<Q")


class WorkloadType(enum.IntEnum):
    TRAIN = 0
    VAL = 1
    PRED = 2


@dataclass
class WorkloadFile:
    """One part of a data file: part ``k`` of ``n`` virtual parts."""

    filename: str = ""
    format: str = ""
    n: int = 1
    k: int = 0

    def short_debug_string(self) -> str:
        return f"{self.filename} {self.k} / {self.n}"


def _read_exact(stream, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise StreamError(f"expected {size} bytes, got {len(data)}")
    return data


def _read_int(stream) -> int:
    return _INT.unpack(_read_exact(stream, _INT.size))[0]


def _read_size(stream) -> int:
    return _SIZE.unpack(_read_exact(stream, _SIZE.size))[0]


def _read_string(stream) -> str:
    return _read_exact(stream, _read_size(stream)).decode("utf-8")


def _write_string(stream, text: str) -> None:
    raw = text.encode("utf-8")
    stream.write(_SIZE.pack(len(raw)))
    stream.write(raw)


@dataclass
class Workload:
    """A set of file parts to process for one pass over the data."""

    type: WorkloadType = WorkloadType.TRAIN
    data_pass: int = 0
    file: list[WorkloadFile] = field(default_factory=list)

    def short_debug_string(self) -> str:
        kind = "training," if self.type == WorkloadType.TRAIN else "validation,"
        parts = "".join(f" {f.short_debug_string()}" for f in self.file)
        return f"iter = {self.data_pass}, {kind}{parts}"

    def is_empty(self) -> bool:
        return not self.file

    def save(self, stream) -> None:
        """Write the workload to a binary stream."""
        stream.write(_INT.pack(int(self.type)))
        stream.write(_INT.pack(self.data_pass))
        stream.write(_SIZE.pack(len(self.file)))
        for f in self.file:
            _write_string(stream, f.filename)
            _write_string(stream, f.format)
            stream.write(_INT.pack(f.n))
            stream.write(_INT.pack(f.k))

    @classmethod
    def load(cls, stream) -> Workload:
        """Read a workload written by :meth:`save`."""
        wtype = WorkloadType(_read_int(stream))
        data_pass = _read_int(stream)
        files = []
        for _ in range(_read_size(stream)):
            filename = _read_string(stream)
            fmt = _read_string(stream)
            n = _read_int(stream)
            k = _read_int(stream)
            files.append(WorkloadFile(filename=filename, format=fmt, n=n, k=k))
        return cls(type=wtype, data_pass=data_pass, file=files)


def match_file(pattern: str) -> list[str]:
    """Return the paths in the pattern's directory whose path matches its last part.

    The last path component is a regular expression, e.g. ``data/part-.*``.
    """
    pos = max(pattern.rfind("/"), pattern.rfind("\\"))
    if pos == -1:
        directory, name = "./", pattern
    else:
        directory, name = pattern[:pos] or "/", pattern[pos + 1:]
    try:
        regex = re.compile(".*" + name, re.MULTILINE)
    except re.error as exc:
        raise ValueError(f"error regex {pattern!r}: {exc}") from exc

    local = directory
    if local.startswith("file://"):
        local = local[len("file://"):] or "/"
    elif "://" in local:
        protocol = local.split("://", 1)[0]
        raise StreamError(f"unsupported protocol {protocol!r} in {pattern!r}")

    sep = "" if directory.endswith(("/", "\\")) else "/"
    paths = (f"{directory}{sep}{entry}" for entry in sorted(os.listdir(local)))
    return [path for path in paths if regex.search(path)]