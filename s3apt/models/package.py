# s3apt/models/package.py
"""Package record model"""

from dataclasses import dataclass, field
from typing import Dict, Optional

# Control fields rendered from the record's own attributes
GENERATED_FIELDS = (
    "Package",
    "Version",
    "Architecture",
    "Filename",
    "Size",
    "MD5sum",
    "SHA1",
    "SHA256",
)


@dataclass(frozen=True)
class PackageRecord:
    """One binary package entry of a Packages index"""
    name: str
    version: str
    architecture: str
    epoch: Optional[str] = None
    iteration: Optional[str] = None
    filename: Optional[str] = None  # Local content path, None for indexed records
    url_filename: Optional[str] = None  # Target key relative to the repository root
    size: Optional[int] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)  # Remaining control fields, in order

    @property
    def full_version(self) -> str:
        """Version string as written in the index: [epoch:]version[-iteration]"""
        version = self.version
        if self.epoch:
            version = f"{self.epoch}:{version}"
        if self.iteration:
            version = f"{version}-{self.iteration}"
        return version

    @property
    def version_iteration(self) -> str:
        """Version without epoch: version[-iteration]"""
        if self.iteration:
            return f"{self.version}-{self.iteration}"
        return self.version

    def matches_version(self, versions) -> bool:
        """Check whether any accepted spelling of this record's version is listed"""
        return (self.version in versions
                or self.version_iteration in versions
                or self.full_version in versions)

    def generate(self) -> str:
        """Render the control stanza, terminated by a newline"""
        lines = [
            f"Package: {self.name}",
            f"Version: {self.full_version}",
            f"Architecture: {self.architecture}",
        ]

        for key, value in self.fields.items():
            if key in GENERATED_FIELDS:
                continue
            lines.append(f"{key}: {value}")

        if self.url_filename:
            lines.append(f"Filename: {self.url_filename}")
        if self.size is not None:
            lines.append(f"Size: {self.size}")
        if self.md5:
            lines.append(f"MD5sum: {self.md5}")
        if self.sha1:
            lines.append(f"SHA1: {self.sha1}")
        if self.sha256:
            lines.append(f"SHA256: {self.sha256}")

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return f"{self.name}_{self.full_version}_{self.architecture}"
