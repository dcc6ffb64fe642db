"""s3apt - Debian APT repository publishing to object storage.

Maintains the Packages indexes, by-hash copies and signed Release
descriptor of an APT repository kept in S3 or a local directory.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Repository metadata
from .core import Manifest, Release, GpgSigner, load_deb

# Data models
from .models import (
    ChecksumFile,
    PackageRecord,
    RepoConfig,
    StorageConfig,
    SigningConfig,
    RepositoryConfig,
    PublishResult,
    VerifyResult,
)

# Storage
from .storage import StorageBackend, StorageFactory

# Services
from .services import ConfigService, PublishService

# Exceptions
from .api.exceptions import (
    S3AptError,
    ParseError,
    ConfigError,
    StorageError,
    ConflictError,
    SigningError,
    PackageNotFoundError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Repository metadata
    "Manifest",
    "Release",
    "GpgSigner",
    "load_deb",

    # Data models
    "ChecksumFile",
    "PackageRecord",
    "RepoConfig",
    "StorageConfig",
    "SigningConfig",
    "RepositoryConfig",
    "PublishResult",
    "VerifyResult",

    # Storage
    "StorageBackend",
    "StorageFactory",

    # Services
    "ConfigService",
    "PublishService",

    # Exceptions
    "S3AptError",
    "ParseError",
    "ConfigError",
    "StorageError",
    "ConflictError",
    "SigningError",
    "PackageNotFoundError",
]
