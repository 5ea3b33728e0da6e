[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "repaddu"
version = "0.1.0"
description = "Render numbered, self-describing Markdown bundles, tree listings and language/analysis reports for a set of repository files."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "repository",
    "markdown",
    "documentation",
    "source-code",
    "bundling",
    "llm-context",
    "language-report",
]
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
    "Topic :: Software Development :: Documentation",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["repaddu"]

[tool.hatch.build.targets.sdist]
include = ["repaddu", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
