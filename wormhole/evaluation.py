"""Metrics for binary classification predictions."""

from __future__ import annotations

import math
from typing import Sequence


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def _log(x: float) -> float:
    return math.log(x) if x > 0 else -math.inf


class BinClassEval:
    """Evaluate real-valued predictions against labels; labels > 0 are positive."""

    def __init__(self, label: Sequence[float], predict: Sequence[float]) -> None:
        if len(label) != len(predict):
            raise ValueError(
                f"label and predict differ in length: {len(label)} != {len(predict)}"
            )
        self.label = tuple(label)
        self.predict = tuple(predict)

    def auc(self) -> float:
        n = len(self.label)
        ranked = sorted(zip(self.predict, self.label), key=lambda pair: pair[0])
        area = 0.0
        cum_tp = 0
        for _, y in ranked:
            if y > 0:
                cum_tp += 1
            else:
                area += cum_tp
        if cum_tp == 0 or cum_tp == n:
            return 1.0
        area /= cum_tp * (n - cum_tp)
        return 1 - area if area < 0.5 else area

    def accuracy(self, threshold: float) -> float:
        n = len(self.label)
        if not n:
            return math.nan
        correct = sum(
            1
            for y, p in zip(self.label, self.predict)
            if (y > 0 and p > threshold) or (y <= 0 and p <= threshold)
        )
        acc = correct / n
        return acc if acc > 0.5 else 1 - acc

    def log_loss(self) -> float:
        loss = 0.0
        for y, pred in zip(self.label, self.predict):
            y = 1.0 if y > 0 else 0.0
            p = max(_sigmoid(pred), 1e-10)
            if y:
                loss += _log(p)
            else:
                loss += _log(1 - p)
        return -loss

    def logit_objv(self) -> float:
        objv = 0.0
        for y, pred in zip(self.label, self.predict):
            score = (1.0 if y > 0 else -1.0) * pred
            if score < -30:
                objv += -score
            elif score <= 30:
                objv += math.log1p(math.exp(-score))
        return objv

    def copc(self) -> float:
        clicks = sum(1 for y in self.label if y > 0)
        expected = sum(_sigmoid(p) for p in self.predict)
        if expected == 0:
            return math.nan
        return clicks / expected

    def rmse(self) -> float:
        n = len(self.label)
        if not n:
            return math.nan
        se = sum((y - p) ** 2 for y, p in zip(self.label, self.predict))
        return math.sqrt(se / n)