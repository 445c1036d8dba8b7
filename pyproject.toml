[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dnfmigrate"
version = "0.1.0"
description = "Migrate a DNF 4 history database into a DNF 5 history database"
requires-python = ">=3.10"
keywords = ["dnf", "dnf5", "history", "sqlite", "migration", "rpm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: System :: Software Distribution",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dnfmigrate = "dnfmigrate.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dnfmigrate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
