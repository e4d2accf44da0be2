"""CLI package for notice-file-generator."""

from .main import cli, main

__all__ = ["cli", "main"]
