[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "baconsel"
version = "0.1.0"
description = "Event selection for collider events: object identification, vetoes, recoil and missing-energy variables, flat CSV output"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "physics",
    "high-energy-physics",
    "event-selection",
    "ntuple",
    "missing-energy",
    "recoil",
    "monojet",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
baconsel = "baconsel.runner:main"

[tool.hatch.build.targets.wheel]
packages = ["baconsel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
