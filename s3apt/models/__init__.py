# s3apt/models/__init__.py
"""Data models for s3apt"""

from .checksum import ChecksumFile
from .package import PackageRecord
from .config import RepoConfig, StorageConfig, SigningConfig, RepositoryConfig
from .result import PublishResult, VerifyResult, MissingPackage

__all__ = [
    "ChecksumFile",
    "PackageRecord",

    # Config models
    "RepoConfig",
    "StorageConfig",
    "SigningConfig",
    "RepositoryConfig",

    # Result models
    "PublishResult",
    "VerifyResult",
    "MissingPackage",
]
