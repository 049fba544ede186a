"""Console utilities for rich output"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from agentc.core.includes import Diagnostic

# Custom theme
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "success": "green",
        "dim": "dim",
        "path": "blue",
    }
)

# Global console instance
console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True)

# Set by the CLI callback
_quiet = False


def set_quiet(quiet: bool) -> None:
    global _quiet
    _quiet = quiet


def print_info(message: str) -> None:
    """Print info message"""
    if not _quiet:
        console.print(f"[info]{escape(message)}[/info]")


def print_warning(message: str) -> None:
    """Print warning message"""
    err_console.print(f"[warning]Warning: {escape(message)}[/warning]")


def print_error(message: str) -> None:
    """Print error message"""
    err_console.print(f"[error]Error: {escape(message)}[/error]")


def print_success(message: str) -> None:
    """Print success message"""
    if not _quiet:
        console.print(f"[success]{escape(message)}[/success]")


def print_dim(message: str) -> None:
    """Print dimmed message"""
    if not _quiet:
        console.print(f"[dim]{escape(message)}[/dim]")


def display_path(path: Path, root: Optional[Path] = None) -> str:
    """Show path relative to root when it lives under it"""
    if root is not None:
        try:
            return str(path.resolve().relative_to(root.resolve()))
        except ValueError:
            pass
    return str(path)


def print_diagnostic(diagnostic: Diagnostic, root: Optional[Path] = None) -> None:
    """Print an include diagnostic with its originating file"""
    message = diagnostic.message
    if diagnostic.source is not None:
        message = f"{message} (in {display_path(diagnostic.source, root)})"

    if diagnostic.is_error:
        print_error(message)
    else:
        print_warning(message)
