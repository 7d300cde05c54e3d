"""Map arbitrary feature ids in a row block onto consecutive ids from 0."""

from __future__ import annotations

from operator import itemgetter
from typing import Any, Callable, Iterable

from wormhole.rowblock import RowBlock, RowBlockContainer

_MASK64 = (1 << 64) - 1
_UNSIGNED_MAX = (1 << 32) - 1


def reverse_bytes(x: int) -> int:
    """Reverse the order of the 4-bit groups of a 64-bit key to spread keys evenly."""
    x &= _MASK64
    x = ((x << 32) | (x >> 32)) & _MASK64
    x = ((x & 0x0000FFFF0000FFFF) << 16) | ((x & 0xFFFF0000FFFF0000) >> 16)
    x = ((x & 0x00FF00FF00FF00FF) << 8) | ((x & 0xFF00FF00FF00FF00) >> 8)
    x = ((x & 0x0F0F0F0F0F0F0F0F) << 4) | ((x & 0xF0F0F0F0F0F0F0F0) >> 4)
    return x & _MASK64


def parallel_sort(
    items: Iterable[Any], num_threads: int, key: Callable[[Any], Any] | None = None
) -> list:
    """Return the items sorted stably by ``key``."""
    if num_threads <= 0:
        raise ValueError(f"num_threads must be positive, got {num_threads}")
    return sorted(items, key=key)


class Localizer:
    """Localise the feature ids of row blocks.

    Keys are transformed before counting: reduced modulo ``max_key`` when it is
    smaller than the largest ``index_bits``-bit id, otherwise nibble-reversed
    for 64-bit ids and kept as-is for narrower ones.
    """

    def __init__(
        self, max_key: int | None = None, index_bits: int = 64, num_threads: int = 2
    ) -> None:
        if index_bits not in (32, 64):
            raise ValueError(f"index_bits must be 32 or 64, got {index_bits}")
        if num_threads <= 0:
            raise ValueError(f"num_threads must be positive, got {num_threads}")
        if max_key is not None and max_key <= 0:
            raise ValueError(f"max_key must be positive, got {max_key}")
        self.index_bits = index_bits
        self.max_key = max_key
        self.num_threads = num_threads
        self._pairs: list[tuple[int, int]] = []

    def _transform(self) -> Callable[[int], int]:
        type_max = (1 << self.index_bits) - 1
        if self.max_key is not None and self.max_key < type_max:
            modulus = self.max_key
            return lambda k: k % modulus
        if self.index_bits == 64:
            return reverse_bytes
        return lambda k: k

    def localize(
        self, block: RowBlock
    ) -> tuple[RowBlockContainer, list[int], list[int]]:
        """Return the localised block, the sorted unique keys and their counts."""
        uniq, counts = self.count_uniq_index(block)
        localized = self.remap_index(block, uniq)
        self.clear()
        return localized, uniq, counts

    def count_uniq_index(self, block: RowBlock) -> tuple[list[int], list[int]]:
        """Return the sorted unique transformed keys and how often each occurs.

        The sorted keys are kept for a following :meth:`remap_index`.
        """
        if block.size == 0:
            return [], []
        nnz = block.offset[block.size] - block.offset[0]
        if nnz >= _UNSIGNED_MAX:
            raise ValueError(f"too many entries in one block: {nnz}")
        transform = self._transform()
        pairs = ((transform(k), i) for i, k in enumerate(block.index[:nnz]))
        self._pairs = parallel_sort(pairs, self.num_threads, key=itemgetter(0))

        uniq: list[int] = []
        counts: list[int] = []
        for key, _ in self._pairs:
            if uniq and uniq[-1] == key:
                counts[-1] += 1
            else:
                uniq.append(key)
                counts.append(1)
        return uniq, counts

    def remap_index(self, block: RowBlock, idx_dict: list[int]) -> RowBlockContainer:
        """Replace each key by its position in the sorted ``idx_dict``.

        Keys not in ``idx_dict`` are dropped.  :meth:`count_uniq_index` must be
        called on the same block first.
        """
        localized = RowBlockContainer()
        if block.size == 0 or not idx_dict:
            return localized
        if len(idx_dict) >= _UNSIGNED_MAX:
            raise ValueError(f"dictionary too large: {len(idx_dict)}")
        base = block.offset[0]
        nnz = block.offset[block.size] - base
        if nnz != len(self._pairs):
            raise ValueError(
                f"block has {nnz} entries but {len(self._pairs)} were counted; "
                "call count_uniq_index on this block first"
            )

        remapped: list[int | None] = [None] * nnz
        d = 0
        for key, pos in self._pairs:
            while d < len(idx_dict) and idx_dict[d] < key:
                d += 1
            if d == len(idx_dict):
                break
            if idx_dict[d] == key:
                remapped[pos] = d

        for i in range(block.size):
            for j in range(block.offset[i] - base, block.offset[i + 1] - base):
                new = remapped[j]
                if new is None:
                    continue
                localized.index.append(new)
                if block.value is not None:
                    localized.value.append(block.value[j])
            localized.offset.append(len(localized.index))

        localized.label.extend(block.label[:block.size])
        localized.max_index = len(idx_dict) - 1
        return localized

    def clear(self) -> None:
        """Drop the keys kept from the last count."""
        self._pairs = []