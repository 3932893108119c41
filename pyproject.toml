[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quilltext"
version = "0.1.0"
description = "Core of a small text editor: buffer with undo/redo, selections, search, themes and session storage"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["editor", "text", "undo", "search", "themes", "sqlite"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["quilltext"]

[tool.hatch.build.targets.sdist]
include = ["quilltext", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
