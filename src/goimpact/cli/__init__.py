"""CLI module."""

from goimpact.cli.main import app

__all__ = ["app"]
