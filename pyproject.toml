[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "symbolop"
version = "0.1.0"
description = "Parse one-variable expressions in x, differentiate them symbolically, integrate simple polynomials and simplify the results"
requires-python = ">=3.10"
dependencies = []
keywords = ["symbolic", "derivative", "integral", "expression tree", "calculus", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["symbolop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
