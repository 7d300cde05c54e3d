"""Row blocks, sparse products, metrics, losses and workloads for sparse linear models."""

__version__ = "0.1.0"