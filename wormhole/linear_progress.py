"""Progress counters reported by the linear solver's workers and servers."""

from __future__ import annotations

import math
from typing import Iterable


class _Slot:
    """Expose one position of ``data`` as a named attribute."""

    def __init__(self, index: int) -> None:
        self.index = index

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.data[self.index]

    def __set__(self, obj, value: float) -> None:
        obj.data[self.index] = value


def _ratio(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a)


class LinearProgress:
    """Mergeable progress vector: objective, accuracy, AUC and counters.

    ``print_str`` accumulates the total number of examples and non-zero
    weights across calls.
    """

    SIZE = 6

    objv = _Slot(0)
    acc = _Slot(1)
    auc = _Slot(2)
    count = _Slot(3)
    new_ex = _Slot(4)
    new_w = _Slot(5)

    def __init__(self, data: Iterable[float] | None = None) -> None:
        self.data = list(data) if data is not None else [0.0] * self.SIZE
        self.ttl_ex = 0.0
        self.nnz_w = 0.0

    @staticmethod
    def head_str() -> str:
        return "  ttl #ex   inc #ex    |w|_0       logloss  accuracy     AUC"

    def print_str(self) -> str:
        """Return one progress line, or ``""`` if no new examples were seen."""
        if len(self.data) < self.SIZE:
            self.data.extend([0.0] * (self.SIZE - len(self.data)))
        self.ttl_ex += self.new_ex
        self.nnz_w += self.new_w
        if self.new_ex == 0:
            return ""
        return "%8.3g  %8.3g  %11.6g  %8.6f  %8.6f  %8.6f" % (
            self.ttl_ex,
            self.new_ex,
            self.nnz_w,
            _ratio(self.objv, self.new_ex),
            _ratio(self.acc, self.count),
            _ratio(self.auc, self.count),
        )