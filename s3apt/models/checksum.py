# s3apt/models/checksum.py
"""Checksum value type recorded for every published artifact"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..constants import HASH_ALGORITHMS
from ..utils.hash_utils import generate_content_fingerprint, generate_file_fingerprint


@dataclass
class ChecksumFile:
    """Size and digests of one published file.

    Digests may be missing when the entry was read back from a Release
    descriptor that does not list every algorithm.
    """
    size: int
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None

    @classmethod
    def from_bytes(cls, data: bytes) -> 'ChecksumFile':
        """Compute size and all digests of in-memory content"""
        digests = generate_content_fingerprint(data)
        return cls(size=len(data), **digests)

    @classmethod
    def from_file(cls, path: Path) -> 'ChecksumFile':
        """Compute size and all digests of a local file"""
        path = Path(path)
        digests = generate_file_fingerprint(path)
        return cls(size=path.stat().st_size, **digests)

    def get(self, algorithm: str) -> Optional[str]:
        """Get the hex digest for an algorithm name"""
        if algorithm not in HASH_ALGORITHMS:
            raise ValueError(f"Unsupported digest algorithm: {algorithm}")
        return getattr(self, algorithm)

    def set(self, algorithm: str, digest: str) -> None:
        """Set the hex digest for an algorithm name"""
        if algorithm not in HASH_ALGORITHMS:
            raise ValueError(f"Unsupported digest algorithm: {algorithm}")
        setattr(self, algorithm, digest)

    def digests(self) -> Dict[str, str]:
        """Known digests in release order (md5, sha1, sha256)"""
        return {
            algo: getattr(self, algo)
            for algo in HASH_ALGORITHMS
            if getattr(self, algo)
        }

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary"""
        data = {'size': self.size}
        data.update(self.digests())
        return data
