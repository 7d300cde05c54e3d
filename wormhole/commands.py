"""Command words and naming rules shared by the scheduler, servers and workers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from wormhole.workload import WorkloadType

_PROCESS = 1
_LOAD_MODEL = 1 << 1
_SAVE_MODEL = 1 << 2
_ITER_SHIFT = 16


@dataclass
class DataParCmd:
    """A command word; bit 0 asks the receiver to process a workload."""

    cmd: int = 0

    def set_process(self) -> None:
        self.cmd |= _PROCESS

    def process(self) -> bool:
        return bool(self.cmd & _PROCESS)


@dataclass
class IterCmd(DataParCmd):
    """A command word that can also ask servers to load or save a model.

    The iteration is stored shifted by one above bit 16, so ``-1`` (meaning
    "the last iteration") is encoded as zero.
    """

    def set_iter(self, iteration: int) -> None:
        self.cmd |= (iteration + 1) << _ITER_SHIFT

    def set_load_model(self) -> None:
        self.cmd |= _LOAD_MODEL

    def set_save_model(self) -> None:
        self.cmd |= _SAVE_MODEL

    def load_model(self) -> bool:
        return bool(self.cmd & _LOAD_MODEL)

    def save_model(self) -> bool:
        return bool(self.cmd & _SAVE_MODEL)

    def iter(self) -> int:
        return (self.cmd >> _ITER_SHIFT) - 1


def model_name(base: str, iteration: int, rank: int) -> str:
    """Return the model file a server of ``rank`` uses; a negative iteration means the last."""
    name = base
    if iteration >= 0:
        name += f"_iter-{iteration}"
    return f"{name}_part-{rank}"


def predict_filename(prefix: str, input_name: str, k: int) -> str:
    """Return the prediction output for part ``k`` of the input file ``input_name``."""
    pos = max(input_name.rfind("/"), input_name.rfind("\\"))
    base = input_name if pos == -1 else input_name[pos + 1:]
    return f"{prefix}{base}_part-{k}"


class MinibatchSettings(NamedTuple):
    minibatch_size: int
    shuffle: int
    negative_sampling: float
    max_concurrency: int


def minibatch_settings(
    workload_type: WorkloadType,
    mb_size: int = 10000,
    shuffle: int = 0,
    neg_sampling: float = 1.0,
    concurrent_mb: int = 1,
    val_mb_size: int = 10000000,
    val_concurrent_mb: int = 10,
) -> MinibatchSettings:
    """Choose how a worker reads a workload of the given type.

    Training uses ``mb_size`` with a shuffle buffer of ``mb_size * shuffle``
    examples and negative sampling; validation and prediction use the larger
    ``val_mb_size`` without either.  Prediction runs one minibatch at a time.
    """
    workload_type = WorkloadType(workload_type)
    train = workload_type == WorkloadType.TRAIN
    if workload_type == WorkloadType.PRED:
        max_mb = 1
    else:
        max_mb = concurrent_mb if train else val_concurrent_mb
    return MinibatchSettings(
        minibatch_size=mb_size if train else val_mb_size,
        shuffle=mb_size * shuffle if train else 0,
        negative_sampling=neg_sampling if train else 1.0,
        max_concurrency=max_mb,
    )