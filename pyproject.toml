[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nodeops"
version = "0.1.0"
description = "Building blocks for operating blockchain full nodes on Kubernetes: resource helpers, health checks and stateful snapshot jobs."
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "operator", "cosmos", "healthcheck", "snapshot", "full node"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nodeops"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
