[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chilang"
version = "0.1.0"
description = "Parser, expression tree and tree-walking simulator for the small chilang language, with a tiny integer virtual machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "parser", "language", "simulator", "virtual-machine"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chilang = "chilang.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["chilang"]

[tool.pytest.ini_options]
addopts = "-ra"
