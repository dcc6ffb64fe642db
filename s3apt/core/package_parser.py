# s3apt/core/package_parser.py
"""Control-text and .deb parsing into package records"""

from dataclasses import replace
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from debian import arfile, deb822, debfile
from debian.debian_support import Version

from ..api.exceptions import ParseError
from ..constants import POOL_DIR
from ..models.checksum import ChecksumFile
from ..models.package import GENERATED_FIELDS, PackageRecord

_GENERATED_KEYS = {f.lower() for f in GENERATED_FIELDS}
_REQUIRED_FIELDS = ("Package", "Version", "Architecture")


def split_version(version: str) -> Tuple[Optional[str], str, Optional[str]]:
    """
    Split a Debian version string

    Args:
        version: Version as written in a control file

    Returns:
        Tuple of (epoch, upstream version, revision)

    Raises:
        ParseError: If the version is not a valid Debian version
    """
    try:
        parsed = Version(version)
    except ValueError as e:
        raise ParseError(f"Invalid version '{version}': {e}") from e

    return parsed.epoch, parsed.upstream_version, parsed.debian_revision


def record_from_control(control: Mapping[str, str],
                        filename: Optional[str] = None,
                        url_filename: Optional[str] = None,
                        checksums: Optional[ChecksumFile] = None) -> PackageRecord:
    """
    Build a record from a parsed control paragraph

    Args:
        control: Control fields
        filename: Local content path, if the package is to be uploaded
        url_filename: Target key; defaults to the paragraph's Filename field
        checksums: Checksums of the content; default to the paragraph's fields

    Returns:
        PackageRecord

    Raises:
        ParseError: If a required field is missing
    """
    missing = [f for f in _REQUIRED_FIELDS if not control.get(f)]
    if missing:
        raise ParseError(f"Missing control field(s): {', '.join(missing)}")

    epoch, version, iteration = split_version(control["Version"].strip())
    fields = {
        key: value for key, value in control.items()
        if key.lower() not in _GENERATED_KEYS
    }

    if checksums is None:
        size = control.get("Size")
        try:
            size = int(size) if size is not None else None
        except ValueError as e:
            raise ParseError(f"Invalid Size field '{size}'") from e
        checksums = ChecksumFile(
            size=size,
            md5=control.get("MD5sum"),
            sha1=control.get("SHA1"),
            sha256=control.get("SHA256"),
        )

    return PackageRecord(
        name=control["Package"].strip(),
        version=version,
        architecture=control["Architecture"].strip(),
        epoch=epoch,
        iteration=iteration,
        filename=filename,
        url_filename=url_filename or control.get("Filename"),
        size=checksums.size,
        md5=checksums.md5,
        sha1=checksums.sha1,
        sha256=checksums.sha256,
        fields=fields,
    )


def parse_string(text: str) -> PackageRecord:
    """
    Parse a single control stanza

    Args:
        text: Stanza text

    Returns:
        PackageRecord

    Raises:
        ParseError: If the stanza is not a valid package entry
    """
    return record_from_control(deb822.Packages(text))


def parse_packages(text: str) -> List[PackageRecord]:
    """
    Parse a whole Packages index, preserving stanza order

    Args:
        text: Index text

    Returns:
        List of records
    """
    return [
        record_from_control(paragraph)
        for paragraph in deb822.Packages.iter_paragraphs(text.splitlines(), use_apt_pkg=False)
    ]


def pool_path(codename: str, name: str, basename: str) -> str:
    """Target key of a package file: pool/<codename>/<n>/<na>/<basename>"""
    return f"{POOL_DIR}/{codename}/{name[0]}/{name[0:2]}/{basename}"


def load_deb(path: Path, codename: str) -> PackageRecord:
    """
    Read a .deb file into a record ready for upload

    Args:
        path: Local .deb path
        codename: Distribution codename used for the pool key

    Returns:
        PackageRecord with checksums of the file

    Raises:
        ParseError: If the file is not a readable Debian package
    """
    path = Path(path)
    try:
        control = debfile.DebFile(str(path)).debcontrol()
    except (debfile.DebError, arfile.ArError, OSError, KeyError, ValueError) as e:
        raise ParseError(f"Unable to read package {path}: {e}") from e

    record = record_from_control(control, filename=str(path), checksums=ChecksumFile.from_file(path))
    return replace(record, url_filename=pool_path(codename, record.name, path.name))
