"""Filesystem storage backend implementation"""

import os
from pathlib import Path
from typing import List, Optional, Dict, Any

import aiofiles

from .base import StorageBackend
from ..api.exceptions import ConfigError, StorageError
from ..utils.async_utils import run_in_executor


class FileSystemStorage(StorageBackend):
    """Local directory laid out like the object store.

    Content types and cache directives have no place on a plain
    filesystem and are dropped.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem storage

        Args:
            config: Configuration including:
                - path: Repository root directory
                - prefix: Optional key prefix below the root
        """
        super().__init__(config)
        base_path = self.config.get('path')
        if not base_path:
            raise ConfigError("Filesystem storage requires 'path'")
        self.base_path = Path(base_path).expanduser()

    async def _do_initialize(self) -> None:
        """Ensure the base directory exists"""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        return self.base_path / self.full_key(key)

    async def read(self, key: str) -> Optional[bytes]:
        await self.initialize()

        full_path = self._get_full_path(key)
        if not full_path.is_file():
            return None

        try:
            async with aiofiles.open(full_path, 'rb') as f:
                return await f.read()
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

    async def write(self,
                    key: str,
                    data: bytes,
                    content_type: str,
                    cache_control: str = "") -> None:
        await self.initialize()

        full_path = self._get_full_path(key)
        tmp_path = full_path.with_name(full_path.name + ".part")
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, 'wb') as f:
                await f.write(data)
            os.replace(tmp_path, full_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {key}: {e}") from e

    async def remove(self, key: str) -> None:
        await self.initialize()

        try:
            self._get_full_path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {key}: {e}") from e

    async def exists(self, key: str) -> bool:
        await self.initialize()
        return self._get_full_path(key).is_file()

    async def list(self, prefix: str = "") -> List[str]:
        await self.initialize()

        root = self.base_path / self.prefix if self.prefix else self.base_path

        def _list():
            if not root.exists():
                return []
            keys = []
            for path in root.rglob('*'):
                if path.is_file():
                    key = path.relative_to(root).as_posix()
                    if key.startswith(prefix):
                        keys.append(key)
            return sorted(keys)

        return await run_in_executor(_list)
