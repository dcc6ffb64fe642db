# s3apt/storage/memory.py
"""In-memory storage backend"""

from dataclasses import dataclass
from typing import List, Optional, Dict, Any, Tuple

from .base import StorageBackend


@dataclass
class StoredObject:
    """Object held by the memory backend"""
    data: bytes
    content_type: str
    cache_control: str = ""


class MemoryStorage(StorageBackend):
    """Dictionary-backed storage.

    Every write and remove is appended to ``operations`` as
    ``(action, key)`` so callers can inspect publication order.
    """

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.objects: Dict[str, StoredObject] = {}
        self.operations: List[Tuple[str, str]] = []

    async def read(self, key: str) -> Optional[bytes]:
        obj = self.objects.get(self.full_key(key))
        return obj.data if obj else None

    async def write(self,
                    key: str,
                    data: bytes,
                    content_type: str,
                    cache_control: str = "") -> None:
        full_key = self.full_key(key)
        self.objects[full_key] = StoredObject(bytes(data), content_type, cache_control)
        self.operations.append(("write", full_key))

    async def remove(self, key: str) -> None:
        full_key = self.full_key(key)
        self.objects.pop(full_key, None)
        self.operations.append(("remove", full_key))

    async def exists(self, key: str) -> bool:
        return self.full_key(key) in self.objects

    async def list(self, prefix: str = "") -> List[str]:
        full_prefix = self.full_key(prefix)
        strip = len(self.prefix) + 1 if self.prefix else 0
        return sorted(
            key[strip:] for key in self.objects
            if key.startswith(full_prefix)
        )

    def written_keys(self) -> List[str]:
        """Keys in the order they were written"""
        return [key for action, key in self.operations if action == "write"]
