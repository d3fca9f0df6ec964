[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "msqlite"
version = "1.99.8.0"
description = "A small object layer over SQLite: storages, prepared statements, tables and transactions"
requires-python = ">=3.10"
dependencies = []
keywords = ["sqlite", "database", "statement", "transaction"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["msqlite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
