"""Shared rich consoles."""

from rich.console import Console

console = Console()
error_console = Console(stderr=True)
