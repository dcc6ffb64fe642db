"""Hash calculation utilities"""

import hashlib
from pathlib import Path
from typing import Dict, Iterable, Optional

import aiofiles

from ..constants import DEFAULT_CHUNK_SIZE, HASH_ALGORITHMS


def calculate_content_hash(content: bytes, algorithm: str = "sha256") -> str:
    """
    Calculate hash of content bytes

    Args:
        content: Content bytes
        algorithm: Hash algorithm

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)
    hash_func.update(content)
    return hash_func.hexdigest()


def generate_content_fingerprint(content: bytes,
                                 algorithms: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """
    Generate multiple checksums for in-memory content

    Args:
        content: Content bytes
        algorithms: Hash algorithms (default: md5, sha1, sha256)

    Returns:
        Dictionary of algorithm -> hex digest
    """
    if algorithms is None:
        algorithms = HASH_ALGORITHMS

    return {algo: calculate_content_hash(content, algo) for algo in algorithms}


def generate_file_fingerprint(file_path: Path,
                              algorithms: Optional[Iterable[str]] = None,
                              chunk_size: int = 8192) -> Dict[str, str]:
    """
    Generate multiple checksums for a file

    Args:
        file_path: Path to file
        algorithms: Hash algorithms (default: md5, sha1, sha256)
        chunk_size: Read chunk size

    Returns:
        Dictionary of algorithm -> hex digest
    """
    if algorithms is None:
        algorithms = HASH_ALGORITHMS

    # Read file once and calculate all hashes
    hashers = {algo: hashlib.new(algo) for algo in algorithms}

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            for hasher in hashers.values():
                hasher.update(chunk)

    return {algo: hasher.hexdigest() for algo, hasher in hashers.items()}


async def read_file_async(file_path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Read a whole file asynchronously

    Args:
        file_path: Path to file
        chunk_size: Read chunk size

    Returns:
        File content
    """
    chunks = []
    async with aiofiles.open(file_path, 'rb') as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)
