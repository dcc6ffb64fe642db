"""CLI utilities"""

from .output import (
    console,
    print_error,
    format_publish_result,
    format_package_table,
    format_verify_result,
)

__all__ = [
    "console",
    "print_error",
    "format_publish_result",
    "format_package_table",
    "format_verify_result",
]
