"""Scalar losses for linear models over sparse row blocks."""

from __future__ import annotations

import enum
import math
from abc import ABC, abstractmethod
from typing import Sequence, TextIO

from wormhole.evaluation import BinClassEval
from wormhole.rowblock import RowBlock, RowBlockContainer
from wormhole.sparse import spmv_times, spmv_trans_times


class LossType(enum.Enum):
    LOGIT = "logit"
    SQUARE_HINGE = "square_hinge"


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


class ScalarLoss(ABC):
    """A loss of the real-valued prediction ``X @ w`` against a label."""

    def __init__(
        self, data: RowBlock | RowBlockContainer, w: Sequence[float]
    ) -> None:
        if isinstance(data, RowBlockContainer):
            data = data.get_block()
        self.data = data
        self.w_size = len(w)
        self.xw = spmv_times(data, w)

    def _signs(self) -> list[float]:
        return [1.0 if y > 0 else -1.0 for y in self.data.label[: self.data.size]]

    def evaluate(self, prog) -> None:
        """Record the number of examples in ``prog``."""
        prog.new_ex = self.data.size
        prog.count = 1

    @abstractmethod
    def calc_grad(self) -> list[float]:
        """Return the gradient with respect to ``w``."""

    def predict(self, out: TextIO, prob_out: bool) -> None:
        """Write one prediction per line: a probability, or the raw margin."""
        for p in self.xw:
            value = _sigmoid(p) if prob_out else p
            out.write(f"{value:g}\n")


class _BinClassLoss(ScalarLoss):
    """Binary classification with labels > 0 positive."""

    def _eval(self) -> BinClassEval:
        return BinClassEval(self.data.label[: self.data.size], self.xw)

    def evaluate(self, prog) -> None:
        super().evaluate(prog)
        ev = self._eval()
        prog.auc = ev.auc()
        prog.acc = ev.accuracy(0)


class LogitLoss(_BinClassLoss):
    """Logistic loss ``log(1 + exp(-y <x, w>))``."""

    def evaluate(self, prog) -> None:
        super().evaluate(prog)
        prog.objv = self._eval().logit_objv()

    def calc_grad(self) -> list[float]:
        dual = []
        for y, xw in zip(self._signs(), self.xw):
            s = y * xw
            if s > 0:
                e = math.exp(-s)
                dual.append(-y * e / (1.0 + e))
            else:
                dual.append(-y / (1.0 + math.exp(s)))
        return spmv_trans_times(self.data, dual, self.w_size)


class SquareHingeLoss(_BinClassLoss):
    """Squared hinge loss ``max(0, 1 - y p)^2``."""

    def evaluate(self, prog) -> None:
        super().evaluate(prog)
        prog.objv = sum(
            max(1 - y * xw, 0.0) ** 2 for y, xw in zip(self._signs(), self.xw)
        )

    def calc_grad(self) -> list[float]:
        dual = [y if y * xw > 1.0 else 0.0 for y, xw in zip(self._signs(), self.xw)]
        grad = spmv_trans_times(self.data, dual, self.w_size)
        return [g * -2.0 for g in grad]


_LOSSES = {LossType.LOGIT: LogitLoss, LossType.SQUARE_HINGE: SquareHingeLoss}


def create_loss(
    loss_type: LossType | str,
    data: RowBlock | RowBlockContainer,
    w: Sequence[float],
) -> ScalarLoss:
    """Build the loss named by ``loss_type``; unknown names raise ValueError."""
    kind = LossType(loss_type)
    return _LOSSES[kind](data, w)