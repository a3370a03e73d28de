"""
Command-line interface for Book Builder.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
