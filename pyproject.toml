[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treeedb"
version = "0.1.0"
description = "Generate Datalog facts from syntax trees and Soufflé declarations from tree-sitter grammars"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "datalog",
    "souffle",
    "tree-sitter",
    "static-analysis",
    "code-generation",
    "csv",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
treeedbgen-souffle = "treeedb.gencli:main"

[tool.hatch.build.targets.wheel]
packages = ["treeedb"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
