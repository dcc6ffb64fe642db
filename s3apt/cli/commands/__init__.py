# s3apt/cli/commands/__init__.py
"""CLI commands"""

from . import upload
from . import delete
from . import list_cmd
from . import verify

__all__ = [
    "upload",
    "delete",
    "list_cmd",
    "verify",
]
