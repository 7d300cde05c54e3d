import io

import pytest

from wormhole.evaluation import BinClassEval
from wormhole.linear_loss import (
    LogitLoss,
    LossType,
    ScalarLoss,
    SquareHingeLoss,
    create_loss,
)
from wormhole.linear_progress import LinearProgress
from wormhole.rowblock import RowBlock, RowBlockContainer
from wormhole.sparse import spmv_times


def _block():
    return RowBlock(label=[1.0, 0.0], offset=[0, 2, 3], index=[0, 1, 1])


def _objv(w):
    prog = LinearProgress()
    create_loss(LossType.LOGIT, _block(), w).evaluate(prog)
    return prog.objv


def test_logit_evaluate_matches_metrics():
    w = [0.5, -0.25]
    loss = create_loss("logit", _block(), w)
    prog = LinearProgress()
    loss.evaluate(prog)
    ev = BinClassEval([1.0, 0.0], spmv_times(_block(), w))
    assert prog.new_ex == 2
    assert prog.count == 1
    assert prog.objv == pytest.approx(ev.logit_objv())
    assert prog.auc == pytest.approx(ev.auc())
    assert prog.acc == pytest.approx(ev.accuracy(0))


def test_logit_gradient_matches_finite_difference():
    w = [0.3, -0.7]
    grad = LogitLoss(_block(), w).calc_grad()
    h = 1e-6
    for j in range(len(w)):
        up = list(w)
        down = list(w)
        up[j] += h
        down[j] -= h
        numeric = (_objv(up) - _objv(down)) / (2 * h)
        assert grad[j] == pytest.approx(numeric, rel=1e-4, abs=1e-7)


def test_gradient_covers_unused_features():
    grad = LogitLoss(_block(), [0.1, 0.2, 0.3]).calc_grad()
    assert len(grad) == 3
    assert grad[2] == 0


def test_square_hinge_zero_objective_when_margins_large():
    loss = SquareHingeLoss(_block(), [5.0, -2.0])
    prog = LinearProgress()
    loss.evaluate(prog)
    assert prog.objv == 0
    assert loss.calc_grad() == [-2.0, 0.0]


def test_square_hinge_zero_weights():
    loss = create_loss(LossType.SQUARE_HINGE, _block(), [0.0, 0.0])
    prog = LinearProgress()
    loss.evaluate(prog)
    assert prog.objv == pytest.approx(prog.new_ex)
    assert loss.calc_grad() == [0.0, 0.0]


def test_predict_raw_and_probability():
    loss = LogitLoss(_block(), [0.5, 0.0])
    raw = io.StringIO()
    loss.predict(raw, False)
    assert [float(x) for x in raw.getvalue().split()] == pytest.approx(loss.xw)

    prob = io.StringIO()
    loss.predict(prob, True)
    values = [float(x) for x in prob.getvalue().split()]
    assert len(values) == 2
    assert all(0 < v < 1 for v in values)
    assert values[1] == pytest.approx(0.5)
    assert values[0] > values[1]


def test_accepts_container():
    container = RowBlockContainer(label=[1.0, 0.0], offset=[0, 2, 3], index=[0, 1, 1])
    loss = LogitLoss(container, [0.5, -0.25])
    assert loss.xw == pytest.approx(spmv_times(_block(), [0.5, -0.25]))


def test_unknown_loss_type():
    with pytest.raises(ValueError):
        create_loss("square", _block(), [0.0, 0.0])


def test_scalar_loss_is_abstract():
    with pytest.raises(TypeError):
        ScalarLoss(_block(), [0.0, 0.0])