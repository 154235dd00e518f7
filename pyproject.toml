[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ropm"
version = "0.1.0"
description = "A small source package manager that installs packages from a remote repository into ~/.ropm"
requires-python = ">=3.10"
dependencies = []
keywords = ["package-manager", "installer", "sha256", "repository", "make"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ropm = "ropm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ropm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
