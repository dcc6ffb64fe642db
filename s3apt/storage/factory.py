"""Storage backend factory"""

from typing import Dict, Any, Type

from .base import StorageBackend
from .filesystem import FileSystemStorage
from .memory import MemoryStorage
from .s3 import S3Storage
from ..api.exceptions import ConfigError
from ..constants import StorageType
from ..models.config import StorageConfig


class StorageFactory:
    """Factory for creating storage backend instances"""

    # Registry of storage backends
    _backends: Dict[StorageType, Type[StorageBackend]] = {
        StorageType.MEMORY: MemoryStorage,
        StorageType.FILESYSTEM: FileSystemStorage,
        StorageType.S3: S3Storage,
    }

    @classmethod
    def create_from_config(cls, target: StorageConfig) -> StorageBackend:
        """Create storage backend from storage configuration

        Args:
            target: Storage configuration

        Returns:
            Storage backend instance

        Raises:
            ConfigError: If the configuration is incomplete or the type unsupported
        """
        target.validate()

        storage_type = target.storage_type
        if storage_type not in cls._backends:
            raise ConfigError(f"Unsupported storage type: {storage_type.value}")

        backend_class = cls._backends[storage_type]
        return backend_class(target.to_backend_config())

    @classmethod
    def create_from_dict(cls, storage_type: str, config: Dict[str, Any]) -> StorageBackend:
        """Create storage backend from type and configuration dict

        Args:
            storage_type: Storage type string
            config: Configuration dictionary

        Returns:
            Storage backend instance

        Raises:
            ConfigError: If storage type is not supported
        """
        try:
            type_enum = StorageType(storage_type)
        except ValueError:
            raise ConfigError(f"Invalid storage type: {storage_type}")

        if type_enum not in cls._backends:
            raise ConfigError(f"Unsupported storage type: {storage_type}")

        backend_class = cls._backends[type_enum]
        return backend_class(config)

    @classmethod
    def register_backend(cls, storage_type: StorageType, backend_class: Type[StorageBackend]):
        """Register a new storage backend type

        Args:
            storage_type: Storage type enum
            backend_class: Backend class
        """
        cls._backends[storage_type] = backend_class

    @classmethod
    def get_supported_types(cls) -> list[str]:
        """Get list of supported storage types"""
        return [st.value for st in cls._backends.keys()]
