"""CLI package for interacting with the sensor log dashboard service."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer application lives in ``cli.app``; the package root keeps that name
# resolving to the module so tests can patch attributes on it.

__all__ = []
