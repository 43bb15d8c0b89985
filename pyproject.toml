[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lngcheck"
version = "0.1.0"
description = "Type checker for a small statically typed language with structs, interfaces and modules"
requires-python = ">=3.10"
dependencies = []
keywords = ["type checker", "compiler", "static typing", "interfaces", "modules"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lngcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
