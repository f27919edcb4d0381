"""
txbuilder.cli
=============

Typer-based command-line interface, installed as the `txbuilder` console
script. Typer is only imported when the CLI is actually used.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Optional

__all__ = ["main", "app"]


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name == "app":
        return import_module("txbuilder.cli.main").app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main(argv: Optional[list[str]] = None) -> int:
    return int(import_module("txbuilder.cli.main").main(argv))
