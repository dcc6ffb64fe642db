# s3apt/services/publish_service.py
"""Publish service implementation"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..api.exceptions import PackageNotFoundError
from ..core import Manifest, Release, load_deb
from ..models import (
    RepoConfig,
    PackageRecord,
    PublishResult,
    MissingPackage,
    VerifyResult,
)
from ..storage.base import StorageBackend

logger = logging.getLogger(__name__)

ARCH_ALL = "all"


class PublishService:
    """Repository operations built on Manifest and Release.

    Every operation follows the same order: retrieve the Release and the
    Manifests it touches, mutate them in memory, publish the Manifests,
    fold them into the Release and publish the Release last.
    """

    def __init__(self, storage: StorageBackend, config: RepoConfig):
        """
        Initialize publish service

        Args:
            storage: Object store holding the repository
            config: Repository configuration
        """
        self.storage = storage
        self.config = config

    @property
    def repository(self):
        return self.config.repository

    async def upload(self,
                     deb_paths: Sequence[Union[str, Path]],
                     component: Optional[str] = None,
                     codename: Optional[str] = None,
                     architecture: Optional[str] = None,
                     progress: Optional[Callable[[str], None]] = None) -> PublishResult:
        """
        Add .deb files to the repository and republish its metadata

        Packages of architecture ``all`` go into every architecture index of
        the codename. Every file is read before anything is written, so an
        unreadable package leaves the repository untouched.

        Args:
            deb_paths: Local .deb files
            component: Component override
            codename: Codename override
            architecture: Architecture override for every package
            progress: Callback receiving keys about to be written

        Returns:
            PublishResult
        """
        codename = codename or self.repository.codename
        component = component or self.repository.component
        result = PublishResult(success=False, codename=codename, component=component)

        records = [load_deb(Path(path), codename) for path in deb_paths]
        logger.info(f"Loaded {len(records)} package(s) for {codename}/{component}")

        release = await self._retrieve_release(codename, architecture)
        manifests: Dict[str, Manifest] = {}
        queued = set()

        for record in records:
            for arch in self._target_architectures(record, release, architecture):
                if arch not in manifests:
                    manifests[arch] = await self._retrieve_manifest(codename, component, arch)

                # a file shared by several indexes is uploaded once
                needs_uploading = id(record) not in queued
                queued.add(id(record))

                manifests[arch].add(record, self.repository.preserve_versions, needs_uploading)
                logger.debug(f"Added {record} to {component}/binary-{arch}")

            result.added.append(record)

        await self._publish(release, manifests.values(), result, progress)
        return result

    async def delete(self,
                     name: str,
                     versions: Optional[Iterable[str]] = None,
                     component: Optional[str] = None,
                     codename: Optional[str] = None,
                     architecture: Optional[str] = None,
                     progress: Optional[Callable[[str], None]] = None) -> PublishResult:
        """
        Remove a package from the indexes and republish them

        ``versions`` lists the versions to keep; see
        :meth:`Manifest.delete_package`. Package files under ``pool/`` are
        left in place.

        Raises:
            PackageNotFoundError: If no record was removed
        """
        codename = codename or self.repository.codename
        component = component or self.repository.component
        versions = list(versions) if versions else None
        result = PublishResult(success=False, codename=codename, component=component)

        release = await self._retrieve_release(codename, architecture)
        changed = []

        for arch in self._selected_architectures(release, architecture):
            manifest = await self._retrieve_manifest(codename, component, arch)
            deleted = manifest.delete_package(name, versions)
            if deleted:
                logger.info(f"Removing {', '.join(str(p) for p in deleted)} from {manifest.dist_path}")
                result.removed.extend(deleted)
                changed.append(manifest)

        if not result.removed:
            raise PackageNotFoundError(name, versions)

        await self._publish(release, changed, result, progress)
        return result

    async def list_packages(self,
                            component: Optional[str] = None,
                            codename: Optional[str] = None,
                            architecture: Optional[str] = None) -> Dict[str, List[PackageRecord]]:
        """
        Read the published records

        Returns:
            Records per architecture, in index order
        """
        codename = codename or self.repository.codename
        component = component or self.repository.component

        release = await self._retrieve_release(codename, architecture)
        packages = {}
        for arch in self._selected_architectures(release, architecture):
            manifest = await self._retrieve_manifest(codename, component, arch)
            packages[arch] = list(manifest.packages)
        return packages

    async def verify(self,
                     fix: bool = False,
                     component: Optional[str] = None,
                     codename: Optional[str] = None,
                     architecture: Optional[str] = None,
                     progress: Optional[Callable[[str], None]] = None) -> VerifyResult:
        """
        Check that every indexed package file exists in the store

        Args:
            fix: Drop records whose file is missing and republish

        Returns:
            VerifyResult
        """
        codename = codename or self.repository.codename
        component = component or self.repository.component
        result = VerifyResult(codename=codename, component=component)

        release = await self._retrieve_release(codename, architecture)
        broken = []

        for arch in self._selected_architectures(release, architecture):
            manifest = await self._retrieve_manifest(codename, component, arch)
            missing = []
            for record in manifest.packages:
                result.checked += 1
                if record.url_filename and not await self.storage.exists(record.url_filename):
                    logger.warning(f"{record} is indexed but {record.url_filename} is missing")
                    missing.append(record)

            if missing:
                result.missing.extend(MissingPackage(arch, record) for record in missing)
                manifest.packages = [
                    p for p in manifest.packages
                    if not any(p is m for m in missing)
                ]
                broken.append(manifest)

        if fix and broken:
            await self._publish(
                release, broken,
                PublishResult(success=False, codename=codename, component=component),
                progress,
            )
            result.fixed = True

        return result

    async def _retrieve_release(self, codename: str, architecture: Optional[str]) -> Release:
        repo = self.repository
        return await Release.retrieve(
            self.storage,
            codename,
            origin=repo.origin,
            suite=repo.suite,
            cache_control=repo.cache_control,
            acquire_by_hash=repo.acquire_by_hash,
            supported_archs=[architecture] if architecture else repo.architectures,
        )

    async def _retrieve_manifest(self, codename: str, component: str, architecture: str) -> Manifest:
        repo = self.repository
        return await Manifest.retrieve(
            self.storage,
            codename,
            component,
            architecture,
            cache_control=repo.cache_control,
            fail_if_exists=repo.fail_if_exists,
            skip_package_upload=repo.skip_package_upload,
            acquire_by_hash=repo.acquire_by_hash,
        )

    def _selected_architectures(self, release: Release, architecture: Optional[str]) -> List[str]:
        if architecture:
            return [architecture]
        return list(dict.fromkeys(release.architectures + self.repository.architectures))

    def _target_architectures(self,
                              record: PackageRecord,
                              release: Release,
                              architecture: Optional[str]) -> List[str]:
        if architecture:
            return [architecture]
        if record.architecture == ARCH_ALL:
            return self._selected_architectures(release, None)
        return [record.architecture]

    async def _publish(self,
                       release: Release,
                       manifests: Iterable[Manifest],
                       result: PublishResult,
                       progress: Optional[Callable[[str], None]]) -> None:
        """Publish manifests, then the release, recording written keys"""

        def track(key: str) -> None:
            result.written_keys.append(key)
            if progress:
                progress(key)

        for manifest in manifests:
            await manifest.write_to_s3(self.storage, track)
            release.update_manifest(manifest)

        signing = self.config.signing
        now = datetime.now(timezone.utc)
        await release.write_to_s3(self.storage, signing, inrelease=False, progress=track, now=now)
        if signing.enabled and signing.inrelease:
            await release.write_to_s3(self.storage, signing, inrelease=True, progress=track, now=now)

        result.success = True
        result.complete()
