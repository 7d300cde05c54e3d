"""Sparse row blocks: a batch of labelled examples in compressed-row form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence


@dataclass(frozen=True)
class Row:
    """One example: a label and its sparse features."""

    label: float
    index: tuple[int, ...]
    value: tuple[float, ...] | None = None
    weight: float | None = None


@dataclass
class RowBlock:
    """A block of rows; row ``i`` owns ``index[offset[i]-offset[0]:offset[i+1]-offset[0]]``."""

    label: list[float] = field(default_factory=list)
    offset: list[int] = field(default_factory=lambda: [0])
    index: list[int] = field(default_factory=list)
    value: list[float] | None = None
    weight: list[float] | None = None

    @property
    def size(self) -> int:
        return len(self.offset) - 1

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Row]:
        for i in range(self.size):
            yield self.row(i)

    def row(self, i: int) -> Row:
        if not 0 <= i < self.size:
            raise IndexError(f"row {i} out of range for block of size {self.size}")
        base = self.offset[0]
        begin, end = self.offset[i] - base, self.offset[i + 1] - base
        return Row(
            label=self.label[i],
            index=tuple(self.index[begin:end]),
            value=None if self.value is None else tuple(self.value[begin:end]),
            weight=None if self.weight is None else self.weight[i],
        )

    def slice(self, start: int, stop: int) -> RowBlock:
        """Return rows ``start`` to ``stop`` as a new block with offsets starting at 0."""
        if not 0 <= start <= stop <= self.size:
            raise IndexError(f"slice [{start}, {stop}) out of range for size {self.size}")
        base = self.offset[0]
        begin, end = self.offset[start] - base, self.offset[stop] - base
        first = self.offset[start]
        return RowBlock(
            label=self.label[start:stop],
            offset=[o - first for o in self.offset[start:stop + 1]],
            index=self.index[begin:end],
            value=None if self.value is None else self.value[begin:end],
            weight=None if self.weight is None else self.weight[start:stop],
        )


@dataclass
class RowBlockContainer:
    """A growable store of rows that can hand out a RowBlock view."""

    label: list[float] = field(default_factory=list)
    offset: list[int] = field(default_factory=lambda: [0])
    index: list[int] = field(default_factory=list)
    value: list[float] = field(default_factory=list)
    weight: list[float] = field(default_factory=list)
    max_index: int = 0

    @property
    def size(self) -> int:
        return len(self.offset) - 1

    def __len__(self) -> int:
        return self.size

    def clear(self) -> None:
        self.label.clear()
        self.offset[:] = [0]
        self.index.clear()
        self.value.clear()
        self.weight.clear()
        self.max_index = 0

    def push_row(self, row: Row) -> None:
        self.label.append(row.label)
        if row.weight is not None:
            self.weight.append(row.weight)
        self.index.extend(row.index)
        if row.index:
            self.max_index = max(self.max_index, max(row.index))
        if row.value is not None:
            self.value.extend(row.value)
        self.offset.append(len(self.index))

    def push(self, block: RowBlock) -> None:
        for row in block:
            self.push_row(row)

    def get_block(self) -> RowBlock:
        return RowBlock(
            label=list(self.label),
            offset=list(self.offset),
            index=list(self.index),
            value=list(self.value) if self.value else None,
            weight=list(self.weight) if self.weight else None,
        )


def _fmt(v) -> str:
    if isinstance(v, float):
        return format(v, "g")
    return str(v)


def debug_str(values: Sequence, m: int = 5) -> str:
    """Summarise a sequence as ``[n]: a b c ``, eliding the middle beyond ``2*m`` items."""
    n = len(values)
    if n <= 2 * m:
        items = list(values)
    else:
        items = [*values[:m], "...", *values[n - m:]]
    return f"[{n}]: " + "".join(f"{_fmt(v)} " for v in items)


def block_debug_str(block: RowBlock) -> str:
    nnz = block.offset[block.size] - block.offset[0]
    lines = [
        f"label: {debug_str(block.label[:block.size])}",
        f"offset: {debug_str(block.offset)}",
        f"index: {debug_str(block.index[:nnz])}",
    ]
    if block.value is not None:
        lines.append(f"value: {debug_str(block.value[:nnz])}")
    return "\n".join(lines)