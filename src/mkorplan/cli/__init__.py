"""Command-line interface (Typer)."""

from .main import app

__all__ = ["app"]
