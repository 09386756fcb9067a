"""Utility modules for mappingsbot.

This module exports commonly used utility functions.
"""

from mappingsbot.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_warning",
]
