"""Terminal dashboard for the structural health monitoring service."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer application lives in ``cli.app``; tests patch ``cli.app.ApiClient``,
# so the package root must keep resolving ``cli.app`` to the module.

__all__ = []
