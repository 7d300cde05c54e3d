import pytest

from wormhole.difacto_progress import DifactoProgress


def test_head_str():
    assert DifactoProgress.head_str() == (
        "  ttl #ex   inc #ex |  |w|_0  logloss_w |   |V|_0    logloss    AUC    RMSE"
    )


def test_named_fields_map_to_data():
    p = DifactoProgress()
    p.new_V = 4
    p.rmse = 0.25
    p.objv_w = 2
    assert p.data[7] == 4
    assert p.data[8] == 0.25
    assert p.data[2] == 2
    assert len(p.data) == 9


def test_no_examples_gives_blank_line_but_accumulates():
    p = DifactoProgress()
    p.new_w = 3
    p.new_V = 5
    assert p.print_str() == ""
    assert p.nnz_w == 3
    assert p.nnz_V == 5


def test_print_values():
    p = DifactoProgress([10, 0.75, 20, 0, 1, 40, 5, 6, 0.25])
    fields = p.print_str().split()
    assert fields[2] == "|"
    assert fields[5] == "|"
    assert float(fields[0]) == 40
    assert float(fields[1]) == 40
    assert float(fields[3]) == 5
    assert float(fields[4]) == pytest.approx(0.5)
    assert float(fields[6]) == 6
    assert float(fields[7]) == pytest.approx(0.25)
    assert float(fields[8]) == pytest.approx(0.75)
    assert float(fields[9]) == pytest.approx(0.25)


def test_totals_accumulate():
    p = DifactoProgress([10, 0.75, 20, 0, 1, 40, 5, 6, 0.25])
    p.print_str()
    p.print_str()
    assert p.ttl_ex == 2 * 40
    assert p.nnz_V == 2 * 6


def test_short_data_is_padded():
    p = DifactoProgress([0.0] * 5)
    assert p.print_str() == ""
    assert len(p.data) == 9