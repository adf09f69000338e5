[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsdrav"
version = "1.0.0"
description = "Building blocks for terminal user interfaces: layout, focus, event routing, cell buffers, diffing and ANSI rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["tui", "terminal", "ui", "layout", "flexbox", "rendering", "ansi", "focus", "events"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rsdrav"]

[tool.pytest.ini_options]
addopts = "-ra"
