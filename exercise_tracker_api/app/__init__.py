"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, storage and date
helpers), ``schemas`` (response models), ``services`` (the user
registry and the exercise log) and ``api`` (versioned route handlers).
"""

from .main import app  # noqa: F401
