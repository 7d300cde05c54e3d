import pytest

from wormhole.streams import StreamError, StringStream
from wormhole.workload import (
    Workload,
    WorkloadFile,
    WorkloadType,
    match_file,
)


def test_file_short_debug_string():
    assert WorkloadFile("a.txt", n=10, k=2).short_debug_string() == "a.txt 2 / 10"


def test_workload_short_debug_string():
    wl = Workload(type=WorkloadType.TRAIN, data_pass=3, file=[WorkloadFile("a")])
    assert wl.short_debug_string() == "iter = 3, training, a 0 / 1"


def test_prediction_is_reported_as_validation():
    wl = Workload(type=WorkloadType.PRED, data_pass=1)
    assert wl.short_debug_string() == "iter = 1, validation,"


def test_is_empty():
    assert Workload().is_empty()
    assert not Workload(file=[WorkloadFile("x")]).is_empty()


def test_header_bytes():
    ss = StringStream()
    Workload(type=WorkloadType.PRED, data_pass=1).save(ss)
    assert ss.getvalue() == b"\x02\x00\x00\x00\x01\x00\x00\x00" + b"\x00" * 8


def test_round_trip_string_stream():
    wl = Workload(
        type=WorkloadType.VAL,
        data_pass=4,
        file=[
            WorkloadFile("a.txt", "libsvm", n=10, k=3),
            WorkloadFile("b.crb", "crb", n=2, k=1),
        ],
    )
    ss = StringStream()
    wl.save(ss)
    assert Workload.load(StringStream(ss.getvalue())) == wl


def test_round_trip_file(tmp_path):
    wl = Workload(data_pass=2, file=[WorkloadFile("ü.txt", "adfea", n=5, k=4)])
    path = tmp_path / "wl.bin"
    with open(path, "wb") as fh:
        wl.save(fh)
    with open(path, "rb") as fh:
        assert Workload.load(fh) == wl


def test_truncated_load_raises():
    ss = StringStream()
    Workload(file=[WorkloadFile("a")]).save(ss)
    with pytest.raises(StreamError):
        Workload.load(StringStream(ss.getvalue()[:-3]))


def test_match_file(tmp_path):
    for name in ("part-1", "part-2", "other"):
        (tmp_path / name).write_text("x")
    matched = match_file(f"{tmp_path}/part-.*")
    assert matched == [f"{tmp_path}/part-1", f"{tmp_path}/part-2"]


def test_match_file_bad_regex(tmp_path):
    with pytest.raises(ValueError):
        match_file(f"{tmp_path}/part-(")


def test_match_file_unsupported_protocol():
    with pytest.raises(StreamError):
        match_file("s3://bucket/part-.*")