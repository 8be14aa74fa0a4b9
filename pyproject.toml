[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jqtree"
version = "0.1.0"
description = "Syntax tree, value preview and type helpers for jq-style JSON queries"
requires-python = ">=3.10"
dependencies = []
keywords = ["jq", "json", "query", "syntax-tree", "filter"]
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
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jqtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
