"""Core repository metadata for s3apt"""

from .manifest import Manifest
from .release import Release
from .signer import GpgSigner
from .package_parser import (
    parse_string,
    parse_packages,
    load_deb,
    pool_path,
)

__all__ = [
    "Manifest",
    "Release",
    "GpgSigner",
    "parse_string",
    "parse_packages",
    "load_deb",
    "pool_path",
]
