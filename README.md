# wormhole

Building blocks for sparse linear models and factorization machines on
click-through-rate style data: sparse row blocks in compressed-row form,
sparse matrix products, feature-id localisation, binary-classification
metrics, an L1/L2 proximal operator, linear losses, progress records and
the workload descriptions a scheduler hands to workers.

It is pure Python with no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `wormhole.streams` | `StringStream`, an in-memory binary stream with length-prefixed vectors (`write_vector` / `read_vector`) and strings (`write_string` / `read_string`); `open_stream` for local files and `file://` paths; `StreamError` |
| `wormhole.rowblock` | `Row`, `RowBlock` (`row`, `slice`, iteration) and `RowBlockContainer` (`push_row`, `push`, `clear`, `get_block`); `debug_str` and `block_debug_str` for short summaries |
| `wormhole.evaluation` | `BinClassEval`: `auc`, `accuracy`, `log_loss`, `logit_objv`, `copc`, `rmse` |
| `wormhole.penalty` | `L1L2`, the proximal operator (`solve`) of `lambda1 * |x|_1 + lambda2 * |x|_2^2` |
| `wormhole.sparse` | `Range` (`segment`, `has`); `spmv_times`, `spmv_trans_times`, `spmm_times`, `spmm_trans_times` |
| `wormhole.localizer` | `Localizer` mapping feature ids onto `0..n-1` (`localize`, `count_uniq_index`, `remap_index`, `clear`); `reverse_bytes`, `parallel_sort` |
| `wormhole.workload` | `WorkloadType`, `WorkloadFile`, `Workload` with binary `save` / `load`; `match_file` for regex file matching in a local directory |
| `wormhole.linear_loss` | `LossType`, `ScalarLoss`, `LogitLoss`, `SquareHingeLoss`, `create_loss` |
| `wormhole.linear_progress` | `LinearProgress`: objective, accuracy, AUC and counters, printed as table rows |
| `wormhole.difacto_progress` | `DifactoProgress`: the same for a linear term plus embeddings, with RMSE |
| `wormhole.commands` | `DataParCmd`, `IterCmd` command words; `model_name`, `predict_filename`, `minibatch_settings` |

## Examples

Evaluate predictions:

```python
from wormhole.evaluation import BinClassEval

ev = BinClassEval([1, 0, 1, 0], [2.0, -1.0, 0.5, 0.3])
print(ev.auc(), ev.accuracy(0), ev.logit_objv())
```

Apply an L1/L2 proximal step:

```python
from wormhole.penalty import L1L2

penalty = L1L2(0.1, 0.01)
new_w = penalty.solve(0.5, 1.0)   # (0.5 - 0.1) / (1.0 + 0.01)
```

Localise feature ids and compute a logistic-loss gradient:

```python
from wormhole.rowblock import RowBlock
from wormhole.localizer import Localizer
from wormhole.linear_loss import create_loss
from wormhole.linear_progress import LinearProgress

block = RowBlock(label=[1, 0], offset=[0, 2, 3], index=[100, 7, 100])
localized, keys, counts = Localizer(index_bits=32).localize(block)
# keys == [7, 100], counts == [1, 2]

loss = create_loss("logit", localized, [0.0] * len(keys))
prog = LinearProgress()
loss.evaluate(prog)
grad = loss.calc_grad()
print(LinearProgress.head_str())
print(prog.print_str())
```

Serialise a workload:

```python
from wormhole.streams import StringStream
from wormhole.workload import Workload, WorkloadFile, WorkloadType

wl = Workload(WorkloadType.TRAIN, 0, [WorkloadFile("data/part-0", "libsvm", 10, 3)])
stream = StringStream()
wl.save(stream)
assert Workload.load(StringStream(stream.getvalue())) == wl
```

## What this package does not do

- It does not read data files: there is no parser for text or compressed
  data formats and no minibatch iterator; row blocks are built in memory.
- It has no model-update rules (SGD, AdaGrad, FTRL) and no factorization
  loss; `wormhole.penalty` and `wormhole.difacto_progress` are the pieces
  provided for those.
- It has no workload pool, scheduler, server or worker runtime and no
  networking; `wormhole.commands` and `wormhole.workload` only describe the
  messages such a runtime would exchange.
- It has no command-line tools, so saved models cannot be dumped to text
  with it.