# s3apt/core/release.py
"""Top-level Release descriptor of a distribution"""

import logging
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .manifest import Manifest, ProgressCallback
from .signer import GpgSigner
from ..api.exceptions import ParseError
from ..constants import (
    DISTS_DIR,
    RELEASE_FILE,
    INRELEASE_FILE,
    PACKAGES_FILE,
    SIGNATURE_SUFFIX,
    CONTENT_TYPE_TEXT,
    CONTENT_TYPE_SIGNATURE,
    HASH_ALGORITHMS,
    RELEASE_CHECKSUM_FIELDS,
    DIGEST_LENGTHS,
    RELEASE_DATE_FORMAT,
)
from ..models.checksum import ChecksumFile
from ..models.config import SigningConfig
from ..storage.base import StorageBackend
from ..templates import RELEASE_TEMPLATE
from ..utils.template_utils import render_builtin_template

logger = logging.getLogger(__name__)

_CHECKSUM_LINE = re.compile(r"^[ \t]+(\S+)[ \t]+(\d+)[ \t]+(.+?)[ \t]*$", re.MULTILINE)


class Release:
    """In-memory model of ``dists/<codename>/Release``.

    Holds the components and architectures of a codename and the checksums
    of every index file published under it. Publishing the descriptor is
    the last write of a publish run, so a reader only ever sees a Release
    whose referenced files already exist.
    """

    def __init__(self,
                 codename: Optional[str] = None,
                 origin: Optional[str] = None,
                 suite: Optional[str] = None,
                 cache_control: str = "",
                 acquire_by_hash: bool = True,
                 supported_archs: Optional[Iterable[str]] = None):
        self.codename = codename
        self.origin = origin
        self.suite = suite
        self.cache_control = cache_control
        self.acquire_by_hash = acquire_by_hash
        self.supported_archs: List[str] = list(supported_archs or [])

        self.architectures: List[str] = []
        self.components: List[str] = []
        self.files: Dict[str, ChecksumFile] = {}

    @classmethod
    def parse_release(cls, text: str) -> 'Release':
        """Create a release from descriptor text"""
        release = cls()
        release.parse(text)
        return release

    @classmethod
    async def retrieve(cls,
                       storage: StorageBackend,
                       codename: str,
                       origin: Optional[str] = None,
                       suite: Optional[str] = None,
                       cache_control: str = "",
                       acquire_by_hash: bool = True,
                       supported_archs: Iterable[str] = ()) -> 'Release':
        """
        Load the published Release, or start a new one

        Args:
            storage: Object store
            codename: Distribution codename
            origin: Origin for a new release
            suite: Suite for a new release (defaults to the codename)
            cache_control: Cache-Control directive for written objects
            acquire_by_hash: Advertise and publish by-hash index copies
            supported_archs: Architectures to backfill besides the listed ones

        Returns:
            Release
        """
        key = f"{DISTS_DIR}/{codename}/{RELEASE_FILE}"
        data = await storage.read(key)

        if data is not None:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"{key} is not valid UTF-8: {e}") from e
            release = cls.parse_release(text)
            release.codename = release.codename or codename
            logger.debug(f"Loaded {key} ({len(release.files)} file entries)")
        else:
            release = cls(codename=codename, origin=origin, suite=suite or codename)
            logger.debug(f"No release at {key}, starting new one")

        release.cache_control = cache_control
        release.acquire_by_hash = acquire_by_hash
        release.supported_archs = list(supported_archs)
        return release

    @property
    def filepath(self) -> str:
        return f"{DISTS_DIR}/{self.codename}"

    @property
    def release_filepath(self) -> str:
        return f"{self.filepath}/{RELEASE_FILE}"

    @property
    def inrelease_filepath(self) -> str:
        return f"{self.filepath}/{INRELEASE_FILE}"

    def parse(self, text: str) -> None:
        """
        Populate this release from descriptor text

        Scalar fields come from ``^<Field>: `` lines; missing fields are left
        unset. Checksum lines carry no algorithm name, so the algorithm is
        inferred from the digest length: 32 hex characters is MD5, 40 is
        SHA1 and 64 is SHA256. Any other 64-character digest would be taken
        for SHA256; digests of other lengths only contribute the size.

        Args:
            text: Release descriptor text
        """

        def field(name: str) -> Optional[str]:
            match = re.search(rf"^{name}: .*", text, re.MULTILINE)
            if match is None:
                return None
            return match.group(0).split(": ", 1)[1].strip()

        self.codename = field("Codename")
        self.origin = field("Origin")
        self.suite = field("Suite")
        self.architectures = _unique((field("Architectures") or "").split())
        self.components = _unique((field("Components") or "").split())

        for digest, size, name in _CHECKSUM_LINE.findall(text):
            entry = self.files.setdefault(name, ChecksumFile(size=int(size)))
            algorithm = DIGEST_LENGTHS.get(len(digest))
            if algorithm:
                entry.set(algorithm, digest)

    def generate(self, now: Optional[datetime] = None) -> str:
        """
        Render the descriptor

        Args:
            now: Generation time written to the Date field (default: current UTC time)

        Returns:
            Descriptor text
        """
        now = now or datetime.now(timezone.utc)

        origin_fields = ""
        if self.origin:
            origin_fields = f"Origin: {self.origin}\nLabel: {self.origin}\n"

        variables = {
            'origin_fields': origin_fields,
            'suite': self.suite or self.codename,
            'codename': self.codename,
            'date': now.strftime(RELEASE_DATE_FORMAT),
            'architectures': " ".join(self.architectures),
            'components': " ".join(self.components),
            'extra_fields': "Acquire-By-Hash: yes\n" if self.acquire_by_hash else "",
            'checksums': self._checksum_blocks(),
        }

        text = render_builtin_template(*RELEASE_TEMPLATE, variables)
        return text.rstrip("\n") + "\n"

    def _checksum_blocks(self) -> str:
        blocks = []
        for algorithm in HASH_ALGORITHMS:
            lines = [
                f" {entry.get(algorithm)} {entry.size:>16} {name}"
                for name, entry in sorted(self.files.items())
                if entry.get(algorithm)
            ]
            if lines:
                blocks.append(f"{RELEASE_CHECKSUM_FIELDS[algorithm]}:\n" + "\n".join(lines))
        return "\n".join(blocks)

    def update_manifest(self, manifest: Manifest) -> None:
        """
        Fold a published manifest into this release

        Later checksums for the same file replace earlier ones.

        Args:
            manifest: Manifest whose ``files`` have been filled by publication
        """
        if manifest.component not in self.components:
            self.components.append(manifest.component)
        if manifest.architecture not in self.architectures:
            self.architectures.append(manifest.architecture)
        self.files.update(manifest.files)

    def _backfill_architectures(self) -> List[str]:
        return _unique(self.architectures + self.supported_archs)

    async def validate_others(self,
                              storage: StorageBackend,
                              progress: ProgressCallback = None) -> List[Manifest]:
        """
        Publish empty indexes for every component/architecture pair
        that has no Packages entry yet, and fold them in

        Args:
            storage: Object store
            progress: Callback receiving keys about to be written

        Returns:
            The manifests that were backfilled
        """
        to_apply = []
        for component in self.components:
            for architecture in self._backfill_architectures():
                if f"{component}/binary-{architecture}/{PACKAGES_FILE}" in self.files:
                    continue

                logger.info(f"Backfilling empty index for {component}/binary-{architecture}")
                manifest = Manifest(
                    codename=self.codename,
                    component=component,
                    architecture=architecture,
                    cache_control=self.cache_control,
                    acquire_by_hash=self.acquire_by_hash,
                )
                await manifest.write_to_s3(storage, progress)
                to_apply.append(manifest)

        for manifest in to_apply:
            self.update_manifest(manifest)

        return to_apply

    async def write_to_s3(self,
                          storage: StorageBackend,
                          signing: Optional[SigningConfig] = None,
                          inrelease: bool = False,
                          progress: ProgressCallback = None,
                          now: Optional[datetime] = None) -> None:
        """
        Publish the descriptor, signing it when a key is configured

        Missing indexes are backfilled first and the descriptor itself is
        written last. In detached mode the signature goes to
        ``Release.gpg``, and a stale one is removed when signing is off.
        In clearsign mode the signed text becomes the body of ``InRelease``.

        Args:
            storage: Object store
            signing: Signing configuration; None or a disabled one skips signing
            inrelease: Write a clearsigned InRelease instead of Release
            progress: Callback receiving keys about to be written
            now: Generation time for the Date field

        Raises:
            SigningError: If gpg fails; nothing is written for the descriptor
        """
        await self.validate_others(storage, progress)

        body = self.generate(now).encode('utf-8')
        content_type = CONTENT_TYPE_TEXT
        filepath = self.inrelease_filepath if inrelease else self.release_filepath

        with tempfile.TemporaryDirectory(prefix="s3apt-") as tmpdir:
            release_tmp = Path(tmpdir) / (INRELEASE_FILE if inrelease else RELEASE_FILE)
            release_tmp.write_bytes(body)

            if signing is not None and signing.enabled:
                artifact = await GpgSigner(signing).sign(release_tmp, clearsign=inrelease)
                if inrelease:
                    body = artifact.read_bytes()
                    content_type = CONTENT_TYPE_SIGNATURE
                else:
                    signature_key = filepath + SIGNATURE_SUFFIX
                    if progress:
                        progress(signature_key)
                    await storage.store(
                        signature_key,
                        artifact.read_bytes(),
                        CONTENT_TYPE_SIGNATURE,
                        self.cache_control,
                    )
            elif not inrelease:
                logger.info(f"Signing disabled, removing {filepath}{SIGNATURE_SUFFIX} if present")
                await storage.remove(filepath + SIGNATURE_SUFFIX)

        if progress:
            progress(filepath)
        await storage.store(filepath, body, content_type, self.cache_control)
        logger.info(f"Published {filepath}")

    def __repr__(self) -> str:
        return (f"Release(codename={self.codename!r}, components={self.components!r}, "
                f"architectures={self.architectures!r}, files={len(self.files)})")


def _unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first occurrences in order"""
    return list(dict.fromkeys(items))
