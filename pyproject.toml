[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minirdb"
version = "0.1.0"
description = "A small relational database engine: slotted pages, a buffer pool, a SQL parser and a semantic analyzer"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "sql", "parser", "buffer-pool", "storage-engine", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minirdb = "minirdb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minirdb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
