# s3apt/storage/base.py
"""Storage backend abstract base class"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Dict, Any

from ..api.exceptions import ConflictError
from ..utils.hash_utils import calculate_content_hash, read_file_async

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Abstract base class for all object store backends.

    Keys are relative to the repository root; a configured ``prefix`` is
    prepended by the backend. Writes are independent and non-atomic, and no
    operation is retried at this level.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize storage backend

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self.prefix = (self.config.get('prefix') or '').strip('/')
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize storage backend (e.g., establish connections)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    def full_key(self, key: str) -> str:
        """Apply the configured prefix to a repository-relative key"""
        key = key.lstrip('/')
        if self.prefix:
            return f"{self.prefix}/{key}"
        return key

    @abstractmethod
    async def read(self, key: str) -> Optional[bytes]:
        """
        Read an object

        Args:
            key: Repository-relative key

        Returns:
            Object content or None if absent
        """
        pass

    @abstractmethod
    async def write(self,
                    key: str,
                    data: bytes,
                    content_type: str,
                    cache_control: str = "") -> None:
        """
        Write an object unconditionally

        Args:
            key: Repository-relative key
            data: Object content
            content_type: MIME type stored with the object
            cache_control: Cache-Control directive, empty for none
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """
        Remove an object; absent keys are ignored

        Args:
            key: Repository-relative key
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if an object exists

        Args:
            key: Repository-relative key

        Returns:
            True if exists
        """
        pass

    @abstractmethod
    async def list(self, prefix: str = "") -> List[str]:
        """
        List keys

        Args:
            prefix: Key prefix to filter results

        Returns:
            Sorted list of repository-relative keys
        """
        pass

    async def get_md5(self, key: str) -> Optional[str]:
        """
        Get the MD5 digest of a stored object

        Backends with cheap server-side digests override this.

        Args:
            key: Repository-relative key

        Returns:
            Hex digest or None if absent
        """
        data = await self.read(key)
        if data is None:
            return None
        return calculate_content_hash(data, "md5")

    async def store(self,
                    key: str,
                    data: bytes,
                    content_type: str,
                    cache_control: str = "",
                    fail_if_exists: bool = False) -> None:
        """
        Write an object, optionally refusing to replace different content

        Args:
            key: Repository-relative key
            data: Object content
            content_type: MIME type stored with the object
            cache_control: Cache-Control directive
            fail_if_exists: Raise if the key holds different content

        Raises:
            ConflictError: If fail_if_exists and the stored content differs
        """
        if fail_if_exists:
            existing = await self.get_md5(key)
            if existing is not None:
                if existing == calculate_content_hash(data, "md5"):
                    logger.debug(f"Skipping identical object: {key}")
                    return
                raise ConflictError(
                    f"File {key} already exists with different contents", key
                )

        logger.debug(f"Storing {key} ({len(data)} bytes, {content_type})")
        await self.write(key, data, content_type, cache_control)

    async def store_file(self,
                         local_path: Path,
                         key: str,
                         content_type: str,
                         cache_control: str = "",
                         fail_if_exists: bool = False) -> None:
        """
        Write a local file as an object

        Args:
            local_path: Local file path
            key: Repository-relative key
            content_type: MIME type stored with the object
            cache_control: Cache-Control directive
            fail_if_exists: Raise if the key holds different content
        """
        data = await read_file_async(Path(local_path))
        await self.store(key, data, content_type, cache_control, fail_if_exists)

    async def close(self) -> None:
        """Close storage backend connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
