[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "puke"
version = "0.1.0"
description = "Runtime building blocks: log-bucketed histograms, lazy values, latency metrics, a thread-safe stack, a dense machine table and completion-ring primitives"
requires-python = ">=3.10"
dependencies = []
keywords = ["histogram", "percentile", "metrics", "stack", "completion", "runtime"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
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
packages = ["puke"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
