[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpsons"
version = "0.1.0"
description = "Parse, analyse, export and import Claude Code session logs"
requires-python = ">=3.10"
dependencies = []
keywords = ["claude", "sessions", "jsonl", "analytics", "cost", "export"]
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simpsons"]

[tool.pytest.ini_options]
addopts = "-ra"
