[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nextest"
version = "0.1.0"
description = "Building blocks for a Cargo test runner front end: cargo command lines, test partitioning, output control, errors and exit codes"
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "test-runner", "cargo", "partitioning", "sharding", "xxhash"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nextest"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
