[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmcontracts"
version = "0.1.0"
description = "Example smart contracts (queue, reflect, IBC reflect) with an in-memory runtime for testing them"
requires-python = ">=3.10"
dependencies = []
keywords = ["smart-contracts", "ibc", "storage", "queue", "reflect", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wasmcontracts"]

[tool.pytest.ini_options]
addopts = "-ra"
