"""Sparse matrix products over row blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from wormhole.rowblock import RowBlock


@dataclass(frozen=True)
class Range:
    """The half-open interval ``[begin, end)``."""

    begin: int = 0
    end: int = 0

    def segment(self, idx: int, nparts: int) -> Range:
        """Split the range evenly into ``nparts`` pieces and return piece ``idx``."""
        if self.end < self.begin:
            raise ValueError(f"invalid range [{self.begin}, {self.end})")
        if nparts <= 0:
            raise ValueError(f"nparts must be positive, got {nparts}")
        if not 0 <= idx < nparts:
            raise ValueError(f"segment {idx} out of range for {nparts} parts")
        itv = (self.end - self.begin) / nparts
        begin = int(self.begin + itv * idx)
        end = self.end if idx == nparts - 1 else int(self.begin + itv * (idx + 1))
        return Range(begin, end)

    def has(self, i: int) -> bool:
        return self.begin <= i < self.end


def _rows(matrix: RowBlock) -> Iterator[tuple[int, list[tuple[int, float]]]]:
    """Yield ``(row, [(column, value), ...])`` for every non-empty row."""
    base = matrix.offset[0]
    for i in range(matrix.size):
        begin, end = matrix.offset[i] - base, matrix.offset[i + 1] - base
        if begin == end:
            continue
        columns = matrix.index[begin:end]
        if matrix.value is None:
            values: Sequence[float] = [1.0] * (end - begin)
        else:
            values = matrix.value[begin:end]
        yield i, list(zip(columns, values))


def spmv_times(matrix: RowBlock, x: Sequence[float]) -> list[float]:
    """Return ``matrix @ x``; a block without values counts each entry as 1."""
    y = [0.0] * matrix.size
    for i, entries in _rows(matrix):
        y[i] = sum(x[col] * v for col, v in entries)
    return y


def spmv_trans_times(matrix: RowBlock, x: Sequence[float], y_size: int) -> list[float]:
    """Return ``matrix.T @ x`` with ``y_size`` entries; columns beyond it are dropped."""
    if len(x) != matrix.size:
        raise ValueError(f"x has {len(x)} entries but the matrix has {matrix.size} rows")
    y = [0.0] * y_size
    for i, entries in _rows(matrix):
        x_i = x[i]
        for col, v in entries:
            if 0 <= col < y_size:
                y[col] += x_i * v
    return y


def spmm_times(matrix: RowBlock, x: Sequence[float], dim: int) -> list[float]:
    """Return ``matrix @ X`` where ``X`` is stored row-major with ``dim`` columns."""
    if dim <= 0:
        raise ValueError(f"dim must be positive, got {dim}")
    y = [0.0] * (matrix.size * dim)
    if not x:
        return y
    for i, entries in _rows(matrix):
        row = i * dim
        for col, v in entries:
            src = col * dim
            for k in range(dim):
                y[row + k] += x[src + k] * v
    return y


def spmm_trans_times(
    matrix: RowBlock,
    x: Sequence[float],
    y_size: int,
    p: float = 0.0,
    z: Sequence[float] | None = None,
) -> list[float]:
    """Return ``matrix.T @ X + p * z`` as a flat list of ``y_size`` entries.

    ``X`` is row-major with ``len(x) // matrix.size`` columns.  The ``p * z``
    term is used only when ``z`` has ``y_size`` entries and ``p`` is non-zero.
    """
    if not x or matrix.size == 0:
        return [0.0] * y_size
    dim = len(x) // matrix.size
    if dim <= 0:
        raise ValueError("x has fewer entries than the matrix has rows")
    if z is not None and len(z) == y_size and p != 0:
        y = [v * p for v in z]
    else:
        y = [0.0] * y_size
    columns = Range(0, y_size // dim)
    for i, entries in _rows(matrix):
        src = i * dim
        for col, v in entries:
            if not columns.has(col):
                continue
            dst = col * dim
            for k in range(dim):
                y[dst + k] += x[src + k] * v
    return y