[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpledb"
version = "0.1.0"
description = "Building blocks of a small database engine: block files, a write-ahead log, a buffer pool and an SQL parser"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage", "buffer-pool", "write-ahead-log", "sql", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simpledb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
