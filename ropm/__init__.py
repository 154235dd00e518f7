"""A small source package manager that installs packages into ~/.ropm."""

__version__ = "0.1.0"