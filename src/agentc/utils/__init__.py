"""Utility functions"""

from .console import (
    console,
    display_path,
    print_diagnostic,
    print_dim,
    print_error,
    print_info,
    print_success,
    print_warning,
    set_quiet,
)

__all__ = [
    "console",
    "display_path",
    "print_diagnostic",
    "print_dim",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "set_quiet",
]
