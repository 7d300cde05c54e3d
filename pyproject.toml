[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wormhole"
version = "0.1.0"
description = "Sparse row blocks, losses, metrics and workload bookkeeping for linear models and factorization machines"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "machine-learning",
    "sparse",
    "logistic-regression",
    "factorization-machine",
    "auc",
    "ctr",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["wormhole"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
