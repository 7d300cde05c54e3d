import pytest

from wormhole.penalty import L1L2


def test_inside_threshold_is_zero():
    pen = L1L2(lambda1=2.0)
    assert pen.solve(1.5, 1.0) == 0.0
    assert pen.solve(-2.0, 3.0) == 0.0


def test_no_penalty_is_plain_step():
    assert L1L2().solve(6.0, 2.0) == pytest.approx(3.0)


def test_worked_example():
    assert L1L2(lambda1=1.0, lambda2=1.0).solve(3.0, 1.0) == pytest.approx(1.0)


def test_solution_is_odd_in_z():
    pen = L1L2(lambda1=0.5, lambda2=0.3)
    for z in (0.7, 2.0, 10.0):
        assert pen.solve(-z, 1.5) == pytest.approx(-pen.solve(z, 1.5))


def test_l1_shrinks_towards_zero():
    z, eta = 5.0, 2.0
    plain = L1L2().solve(z, eta)
    shrunk = L1L2(lambda1=1.0).solve(z, eta)
    assert 0 < shrunk < plain


def test_l2_reduces_magnitude():
    weak = L1L2(lambda2=0.1).solve(-4.0, 1.0)
    strong = L1L2(lambda2=5.0).solve(-4.0, 1.0)
    assert abs(strong) < abs(weak)


def test_negative_lambda_rejected():
    with pytest.raises(ValueError):
        L1L2(lambda1=-0.1)
    with pytest.raises(ValueError):
        L1L2(lambda2=-1.0)


def test_non_positive_eta_rejected():
    with pytest.raises(ValueError):
        L1L2().solve(1.0, 0.0)