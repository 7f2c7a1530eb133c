"""sysassert public package interface."""

from __future__ import annotations

from typing import Any

__all__ = ["main"]

__version__ = "0.3.0"


def main(*args: Any, **kwargs: Any) -> Any:
    """Lazy wrapper around :func:`sysassert.main.main`."""

    from .main import main as _main

    return _main(*args, **kwargs)
