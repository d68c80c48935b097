"""Runtime path helpers for packaged resources."""

from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """Return the directory of the installed `accentforge` package."""
    return Path(__file__).resolve().parent


def builtin_recipes_root() -> Path:
    """Resolve the built-in recipe directory shipped with the package."""
    return package_root() / "themes" / "builtin"
