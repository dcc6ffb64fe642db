# s3apt/storage/__init__.py
"""Storage backends for s3apt"""

from .base import StorageBackend
from .memory import MemoryStorage
from .filesystem import FileSystemStorage
from .s3 import S3Storage
from .factory import StorageFactory

__all__ = [
    'StorageBackend',
    'MemoryStorage',
    'FileSystemStorage',
    'S3Storage',
    'StorageFactory',
]
