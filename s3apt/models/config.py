"""Configuration data models"""

import os
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..api.exceptions import ConfigError
from ..constants import (
    StorageType,
    DEFAULT_CODENAME,
    DEFAULT_COMPONENT,
    DEFAULT_ARCHITECTURES,
    DEFAULT_GPG_BINARY,
    DEFAULT_VISIBILITY,
    S3_VISIBILITY_ACLS,
    ENV_S3_ACCESS_KEY,
    ENV_S3_SECRET_KEY,
    ENV_S3_REGION,
)


@dataclass
class StorageConfig:
    """Object store target configuration"""

    type: str = StorageType.S3.value  # memory, filesystem, s3
    prefix: str = ""

    # Filesystem specific
    path: Optional[str] = None

    # S3 specific
    bucket: Optional[str] = None
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    visibility: str = DEFAULT_VISIBILITY
    encryption: bool = False

    # Additional options
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate storage type and visibility"""
        try:
            StorageType(self.type)
        except ValueError:
            raise ConfigError(f"Unsupported storage type: {self.type}")

        if self.visibility not in S3_VISIBILITY_ACLS:
            raise ConfigError(
                f"Invalid visibility: {self.visibility}. "
                f"Must be one of: {', '.join(S3_VISIBILITY_ACLS)}"
            )

    @property
    def storage_type(self) -> StorageType:
        """Get StorageType enum"""
        return StorageType(self.type)

    def validate(self) -> None:
        """Check that the fields required by the storage type are present"""
        if self.storage_type == StorageType.FILESYSTEM and not self.path:
            raise ConfigError("Filesystem storage requires 'path'")
        if self.storage_type == StorageType.S3 and not self.bucket:
            raise ConfigError("S3 storage requires 'bucket'")

    def get_display_info(self) -> str:
        """Get display information for the target"""
        if self.storage_type == StorageType.FILESYSTEM:
            return f"Filesystem: {self.path}"
        elif self.storage_type == StorageType.S3:
            location = f"{self.bucket}/{self.prefix}".rstrip("/")
            return f"S3: {location} ({self.region or 'default region'})"
        return "Memory"

    def to_backend_config(self) -> Dict[str, Any]:
        """Build the keyword configuration handed to a storage backend"""
        config = {"prefix": self.prefix}

        if self.storage_type == StorageType.FILESYSTEM:
            config["path"] = self.path
        elif self.storage_type == StorageType.S3:
            config.update({
                "bucket": self.bucket,
                "region": self.region or os.environ.get(ENV_S3_REGION),
                "endpoint_url": self.endpoint_url,
                "access_key": self.access_key or os.environ.get(ENV_S3_ACCESS_KEY),
                "secret_key": self.secret_key or os.environ.get(ENV_S3_SECRET_KEY),
                "visibility": self.visibility,
                "encryption": self.encryption,
            })

        if self.options:
            config.update(self.options)

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StorageConfig':
        """Create from dictionary"""
        return cls(
            type=data.get("type", StorageType.S3.value),
            prefix=data.get("prefix", "") or "",
            path=data.get("path"),
            bucket=data.get("bucket"),
            region=data.get("region"),
            endpoint_url=data.get("endpoint_url"),
            access_key=data.get("access_key"),
            secret_key=data.get("secret_key"),
            visibility=data.get("visibility", DEFAULT_VISIBILITY),
            encryption=bool(data.get("encryption", False)),
            options=data.get("options", {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"type": self.type}

        if self.prefix:
            data["prefix"] = self.prefix
        if self.path:
            data["path"] = self.path
        if self.bucket:
            data["bucket"] = self.bucket
        if self.region:
            data["region"] = self.region
        if self.endpoint_url:
            data["endpoint_url"] = self.endpoint_url
        if self.storage_type == StorageType.S3:
            data["visibility"] = self.visibility
            data["encryption"] = self.encryption
        if self.options:
            data["options"] = self.options

        return data


@dataclass
class SigningConfig:
    """Release signing configuration.

    ``key=None`` disables signing. An empty string signs with gpg's
    default key.
    """

    key: Optional[str] = None
    gpg_binary: str = DEFAULT_GPG_BINARY
    gpg_options: str = ""
    inrelease: bool = False

    @property
    def enabled(self) -> bool:
        return self.key is not None

    @property
    def option_args(self) -> List[str]:
        """Extra gpg arguments, shell-split"""
        return shlex.split(self.gpg_options) if self.gpg_options else []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SigningConfig':
        """Create from dictionary"""
        key = data.get("key")
        return cls(
            key=str(key) if key is not None else None,
            gpg_binary=data.get("gpg_binary", DEFAULT_GPG_BINARY),
            gpg_options=data.get("gpg_options", "") or "",
            inrelease=bool(data.get("inrelease", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "key": self.key,
            "gpg_binary": self.gpg_binary,
            "gpg_options": self.gpg_options,
            "inrelease": self.inrelease,
        }


@dataclass
class RepositoryConfig:
    """Repository layout and publishing policy"""

    codename: str = DEFAULT_CODENAME
    component: str = DEFAULT_COMPONENT
    architectures: List[str] = field(default_factory=lambda: list(DEFAULT_ARCHITECTURES))
    origin: Optional[str] = None
    suite: Optional[str] = None
    cache_control: str = ""
    acquire_by_hash: bool = True
    fail_if_exists: bool = False
    preserve_versions: bool = False
    skip_package_upload: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositoryConfig':
        """Create from dictionary"""
        architectures = data.get("architectures", DEFAULT_ARCHITECTURES)
        if isinstance(architectures, str):
            architectures = architectures.split()

        return cls(
            codename=data.get("codename", DEFAULT_CODENAME),
            component=data.get("component", DEFAULT_COMPONENT),
            architectures=list(architectures),
            origin=data.get("origin"),
            suite=data.get("suite"),
            cache_control=data.get("cache_control", "") or "",
            acquire_by_hash=bool(data.get("acquire_by_hash", True)),
            fail_if_exists=bool(data.get("fail_if_exists", False)),
            preserve_versions=bool(data.get("preserve_versions", False)),
            skip_package_upload=bool(data.get("skip_package_upload", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "codename": self.codename,
            "component": self.component,
            "architectures": self.architectures,
            "origin": self.origin,
            "suite": self.suite,
            "cache_control": self.cache_control,
            "acquire_by_hash": self.acquire_by_hash,
            "fail_if_exists": self.fail_if_exists,
            "preserve_versions": self.preserve_versions,
            "skip_package_upload": self.skip_package_upload,
        }


@dataclass
class RepoConfig:
    """Complete configuration"""

    storage: StorageConfig = field(default_factory=StorageConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)

    def validate(self) -> None:
        """Validate the configuration as a whole"""
        self.storage.validate()
        if not self.repository.codename:
            raise ConfigError("Repository codename must not be empty")
        if not self.repository.component:
            raise ConfigError("Repository component must not be empty")
        if not self.repository.architectures:
            raise ConfigError("At least one architecture must be configured")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepoConfig':
        """Create from dictionary"""
        data = data or {}
        return cls(
            storage=StorageConfig.from_dict(data.get("storage", {}) or {}),
            repository=RepositoryConfig.from_dict(data.get("repository", {}) or {}),
            signing=SigningConfig.from_dict(data.get("signing", {}) or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "storage": self.storage.to_dict(),
            "repository": self.repository.to_dict(),
            "signing": self.signing.to_dict(),
        }
