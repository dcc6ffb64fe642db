# s3apt/api/__init__.py
"""Public API for s3apt"""

from .exceptions import (
    S3AptError,
    ParseError,
    ConfigError,
    StorageError,
    ConflictError,
    SigningError,
    PackageNotFoundError,
)

__all__ = [
    "S3AptError",
    "ParseError",
    "ConfigError",
    "StorageError",
    "ConflictError",
    "SigningError",
    "PackageNotFoundError",
]
