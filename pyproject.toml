[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memcnf"
version = "0.1.0"
description = "Turn JSON descriptions of pointer and memory operations into CNF formulas and check them with a built-in SAT solver"
requires-python = ">=3.10"
dependencies = []
keywords = ["cnf", "sat", "dimacs", "dpll", "memory", "bit-vector"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
memcnf = "memcnf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["memcnf"]

[tool.pytest.ini_options]
addopts = "-ra"
