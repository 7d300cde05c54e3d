"""Progress counters reported by the factorization-machine solver."""

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


class DifactoProgress:
    """Mergeable progress vector for the linear term ``w`` and embeddings ``V``.

    ``print_str`` accumulates totals of examples and non-zero entries of
    ``w`` and ``V`` across calls.
    """

    SIZE = 9

    objv = _Slot(0)
    auc = _Slot(1)
    objv_w = _Slot(2)
    copc = _Slot(3)
    count = _Slot(4)
    new_ex = _Slot(5)
    new_w = _Slot(6)
    new_V = _Slot(7)
    rmse = _Slot(8)

    def __init__(self, data: Iterable[float] | None = None) -> None:
        self.data = list(data) if data is not None else [0.0] * self.SIZE
        self.ttl_ex = 0.0
        self.nnz_w = 0.0
        self.nnz_V = 0.0

    @staticmethod
    def head_str() -> str:
        return (
            "  ttl #ex   inc #ex |  |w|_0  logloss_w |   |V|_0    logloss    AUC    RMSE"
        )

    def print_str(self) -> str:
        """Return one progress line, or ``""`` if no new examples were seen."""
        if len(self.data) < self.SIZE:
            self.data.extend([0.0] * (self.SIZE - len(self.data)))
        self.ttl_ex += self.new_ex
        self.nnz_w += self.new_w
        self.nnz_V += self.new_V
        if self.new_ex == 0:
            return ""
        return "%9.4g  %7.2g | %9.4g  %6.4f | %9.4g  %7.5f  %7.5f  %7.5f " % (
            self.ttl_ex,
            self.new_ex,
            self.nnz_w,
            _ratio(self.objv_w, self.new_ex),
            self.nnz_V,
            _ratio(self.objv, self.new_ex),
            _ratio(self.auc, self.count),
            self.rmse,
        )