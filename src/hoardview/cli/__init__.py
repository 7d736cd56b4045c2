"""Command-line interface for hoardview.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Grouped font listing
- Single-font preview, conversion and source download
- Static gallery build with progress bar and error summary
"""

from hoardview.cli.app import cli, main

__all__ = ["cli", "main"]
