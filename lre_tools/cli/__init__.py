"""LRE Tools command-line interface package.

Supports ``python -m lre_tools.cli`` as an alternative to the ``lre`` entry point.
"""

from lre_tools.cli.main import cli, main

__all__ = ["cli", "main"]
