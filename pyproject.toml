[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "microgui"
version = "2.1.0"
description = "A tiny immediate-mode UI library that turns widget calls into a list of draw commands"
requires-python = ">=3.10"
dependencies = []
keywords = ["gui", "immediate-mode", "ui", "widgets", "draw-commands"]
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
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["microgui"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
