# s3apt/core/manifest.py
"""Packages index for one (codename, component, architecture)"""

import gzip
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .package_parser import parse_packages
from ..api.exceptions import ConflictError, ParseError
from ..constants import (
    DISTS_DIR,
    BY_HASH_DIR,
    BY_HASH_LABELS,
    PACKAGES_FILE,
    PACKAGES_GZ_FILE,
    CONTENT_TYPE_PACKAGE,
    CONTENT_TYPE_TEXT,
    CONTENT_TYPE_GZIP,
)
from ..models.checksum import ChecksumFile
from ..models.package import PackageRecord
from ..storage.base import StorageBackend

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str], None]]


class Manifest:
    """In-memory model of a binary Packages index.

    Records keep their insertion order; nothing here sorts them. Records
    added in this session with ``needs_uploading`` are also tracked in
    ``packages_to_be_upload`` so that already published package files are
    not sent again. ``files`` holds the checksums of the index files and is
    only filled in by :meth:`write_to_s3`.
    """

    def __init__(self,
                 codename: Optional[str] = None,
                 component: Optional[str] = None,
                 architecture: Optional[str] = None,
                 cache_control: str = "",
                 fail_if_exists: bool = False,
                 skip_package_upload: bool = False,
                 acquire_by_hash: bool = True):
        self.codename = codename
        self.component = component
        self.architecture = architecture
        self.cache_control = cache_control
        self.fail_if_exists = fail_if_exists
        self.skip_package_upload = skip_package_upload
        self.acquire_by_hash = acquire_by_hash

        self.packages: List[PackageRecord] = []
        self.packages_to_be_upload: List[PackageRecord] = []
        self.files: Dict[str, ChecksumFile] = {}

    @classmethod
    def parse_packages(cls, text: str) -> 'Manifest':
        """Create a manifest holding the records of an index text"""
        manifest = cls()
        manifest.packages.extend(parse_packages(text))
        return manifest

    @classmethod
    async def retrieve(cls,
                       storage: StorageBackend,
                       codename: str,
                       component: str,
                       architecture: str,
                       cache_control: str = "",
                       fail_if_exists: bool = False,
                       skip_package_upload: bool = False,
                       acquire_by_hash: bool = True) -> 'Manifest':
        """
        Load the published index, or start an empty one

        Args:
            storage: Object store
            codename: Distribution codename
            component: Component name
            architecture: Architecture name
            cache_control: Cache-Control directive for written objects
            fail_if_exists: Refuse to replace differing content
            skip_package_upload: Only regenerate the index files
            acquire_by_hash: Also publish hash-addressed copies

        Returns:
            Manifest
        """
        key = f"{DISTS_DIR}/{codename}/{component}/binary-{architecture}/{PACKAGES_FILE}"
        data = await storage.read(key)

        if data is not None:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"{key} is not valid UTF-8: {e}") from e
            manifest = cls.parse_packages(text)
            logger.debug(f"Loaded {len(manifest.packages)} package(s) from {key}")
        else:
            manifest = cls()
            logger.debug(f"No index at {key}, starting empty")

        manifest.codename = codename
        manifest.component = component
        manifest.architecture = architecture
        manifest.cache_control = cache_control
        manifest.fail_if_exists = fail_if_exists
        manifest.skip_package_upload = skip_package_upload
        manifest.acquire_by_hash = acquire_by_hash
        return manifest

    @property
    def comp_path(self) -> str:
        """Index directory relative to the release: <component>/binary-<arch>"""
        return f"{self.component}/binary-{self.architecture}"

    @property
    def dist_path(self) -> str:
        """Index directory key: dists/<codename>/<component>/binary-<arch>"""
        return f"{DISTS_DIR}/{self.codename}/{self.comp_path}"

    def add(self,
            pkg: PackageRecord,
            preserve_versions: bool,
            needs_uploading: bool = True) -> PackageRecord:
        """
        Add a record, replacing the records it supersedes

        Without preserve_versions every record of the same name is replaced;
        with it only a record of the same name and full version is.

        Args:
            pkg: Record to add
            preserve_versions: Keep other versions of the same package
            needs_uploading: Upload the package file on publication

        Returns:
            The added record

        Raises:
            ConflictError: If fail_if_exists is set and the same name and
                version is already indexed under a different file name
        """
        if self.fail_if_exists:
            for p in self.packages:
                if (p.name == pkg.name
                        and p.full_version == pkg.full_version
                        and _basename(p.url_filename) != _basename(pkg.url_filename)):
                    raise ConflictError(
                        f"package {pkg.name}_{pkg.full_version} already exists "
                        f"with different filename ({p.url_filename})",
                        p.url_filename,
                    )

        if preserve_versions:
            self.packages = [
                p for p in self.packages
                if not (p.name == pkg.name and p.full_version == pkg.full_version)
            ]
        else:
            self.packages = [p for p in self.packages if p.name != pkg.name]

        self.packages.append(pkg)
        if needs_uploading:
            self.packages_to_be_upload.append(pkg)
        return pkg

    def delete_package(self,
                       name: str,
                       versions: Optional[Iterable[str]] = None) -> List[PackageRecord]:
        """
        Remove records of a package

        Note the meaning of ``versions``: it lists the versions to KEEP.
        Every record of ``name`` whose version is not listed is removed,
        and records whose version is listed survive. A listed version may
        be spelled as the bare version, as ``version-iteration`` or as the
        full version with epoch. Without ``versions`` every record of
        ``name`` is removed.

        Args:
            name: Package name
            versions: Versions of the package to keep

        Returns:
            The removed records, in index order
        """
        if versions is not None:
            versions = set(versions)

        kept = []
        deleted = []
        for p in self.packages:
            if p.name != name:
                kept.append(p)
            elif versions is not None and p.matches_version(versions):
                kept.append(p)
            else:
                deleted.append(p)

        self.packages = kept
        self.packages_to_be_upload = [
            p for p in self.packages_to_be_upload
            if not any(p is d for d in deleted)
        ]
        return deleted

    def generate(self) -> str:
        """Render the index: every stanza in current order, blank-line separated"""
        return "\n".join(pkg.generate() for pkg in self.packages)

    async def write_to_s3(self,
                          storage: StorageBackend,
                          progress: ProgressCallback = None) -> None:
        """
        Publish pending package files and the index files

        Package files go first, then Packages and Packages.gz, each followed
        by its by-hash copies when acquire_by_hash is set. ``progress`` is
        called with each package and index key before it is written.

        Args:
            storage: Object store
            progress: Callback receiving keys about to be written
        """
        manifest = self.generate()

        if not self.skip_package_upload:
            for pkg in self.packages_to_be_upload:
                if pkg.filename is None:
                    raise ValueError(f"Package {pkg} has no local file to upload")
                if progress:
                    progress(pkg.url_filename)
                await storage.store_file(
                    Path(pkg.filename),
                    pkg.url_filename,
                    CONTENT_TYPE_PACKAGE,
                    self.cache_control,
                    self.fail_if_exists,
                )
            self.packages_to_be_upload = []

        data = manifest.encode('utf-8')
        await self._write_index(storage, PACKAGES_FILE, data, CONTENT_TYPE_TEXT, progress)

        gz_data = gzip.compress(data, mtime=0)
        await self._write_index(storage, PACKAGES_GZ_FILE, gz_data, CONTENT_TYPE_GZIP, progress)

        logger.info(
            f"Published {self.dist_path} ({len(self.packages)} package(s))"
        )

    async def _write_index(self,
                           storage: StorageBackend,
                           filename: str,
                           data: bytes,
                           content_type: str,
                           progress: ProgressCallback) -> None:
        key = f"{self.dist_path}/{filename}"
        if progress:
            progress(key)

        await storage.store(key, data, content_type, self.cache_control)

        checksums = ChecksumFile.from_bytes(data)
        self.files[f"{self.comp_path}/{filename}"] = checksums

        if self.acquire_by_hash:
            for algorithm, digest in checksums.digests().items():
                by_hash_key = f"{self.dist_path}/{BY_HASH_DIR}/{BY_HASH_LABELS[algorithm]}/{digest}"
                await storage.store(by_hash_key, data, content_type, self.cache_control)

    def __repr__(self) -> str:
        return (f"Manifest(codename={self.codename!r}, component={self.component!r}, "
                f"architecture={self.architecture!r}, packages={len(self.packages)})")


def _basename(url_filename: Optional[str]) -> Optional[str]:
    return url_filename.rsplit('/', 1)[-1] if url_filename else url_filename
