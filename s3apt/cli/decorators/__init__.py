# s3apt/cli/decorators/__init__.py
"""CLI decorators"""

from .options import repository_options, handle_errors

__all__ = [
    "repository_options",
    "handle_errors",
]
