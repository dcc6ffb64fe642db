"""Pytest configuration and shared fixtures."""

import io
import tarfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from s3apt.models import PackageRecord, RepoConfig
from s3apt.storage import MemoryStorage


SAMPLE_STANZA = """Package: foo
Version: 1.0-1
Architecture: amd64
Maintainer: Jane Doe <jane@example.com>
Installed-Size: 12
Depends: libc6 (>= 2.31)
Section: utils
Priority: optional
Description: test package
 A longer description
 spanning two lines.
Filename: pool/stable/f/fo/foo_1.0-1_amd64.deb
Size: 1024
MD5sum: 0123456789abcdef0123456789abcdef
SHA1: 0123456789abcdef0123456789abcdef01234567
SHA256: 0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef
"""


def make_record(name="foo", version="1.0", architecture="amd64",
                iteration=None, epoch=None, url_filename=None, filename=None):
    """Build an indexed package record."""
    full = version if not iteration else f"{version}-{iteration}"
    if url_filename is None:
        url_filename = f"pool/stable/{name[0]}/{name[:2]}/{name}_{full}_{architecture}.deb"
    return PackageRecord(
        name=name,
        version=version,
        architecture=architecture,
        epoch=epoch,
        iteration=iteration,
        filename=filename,
        url_filename=url_filename,
        size=100,
        md5="d41d8cd98f00b204e9800998ecf8427e",
        sha1="da39a3ee5e6b4b0d3255bfef95601890afd80709",
        sha256="e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
        fields={"Maintainer": "Jane Doe <jane@example.com>", "Description": "test package"},
    )


def _ar_member(name: str, data: bytes) -> bytes:
    header = (
        f"{name:<16}"
        f"{0:<12}"
        f"{0:<6}"
        f"{0:<6}"
        f"{'100644':<8}"
        f"{len(data):<10}"
        "`\n"
    ).encode("ascii")
    if len(data) % 2:
        data += b"\n"
    return header + data


def _tar_gz(files) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def build_deb(directory: Path, name="foo", version="1.0-1", architecture="amd64",
              payload: bytes = b"") -> Path:
    """Write a minimal but well-formed .deb file and return its path."""
    control = (
        f"Package: {name}\n"
        f"Version: {version}\n"
        f"Architecture: {architecture}\n"
        "Maintainer: Jane Doe <jane@example.com>\n"
        "Description: test package\n"
        " Built by the test suite.\n"
    ).encode("utf-8")

    data_files = {"./usr/share/doc/payload": payload} if payload else {}
    content = (
        b"!<arch>\n"
        + _ar_member("debian-binary", b"2.0\n")
        + _ar_member("control.tar.gz", _tar_gz({"./control": control}))
        + _ar_member("data.tar.gz", _tar_gz(data_files))
    )

    path = Path(directory) / f"{name}_{version}_{architecture}.deb"
    path.write_bytes(content)
    return path


@pytest.fixture
def storage():
    """Empty in-memory object store."""
    return MemoryStorage()


@pytest.fixture
def sample_stanza():
    """Single Packages stanza."""
    return SAMPLE_STANZA


@pytest.fixture
def record_factory():
    """Factory for package records."""
    return make_record


@pytest.fixture
def deb_factory(tmp_path):
    """Factory writing .deb files into a temporary directory."""

    def _build(**kwargs):
        return build_deb(tmp_path, **kwargs)

    return _build


@pytest.fixture
def sample_config():
    """Repository configuration dictionary."""
    return {
        "storage": {
            "type": "memory",
        },
        "repository": {
            "codename": "stable",
            "component": "main",
            "architectures": ["amd64", "arm64"],
            "origin": "Example",
        },
        "signing": {},
    }


@pytest.fixture
def repo_config(sample_config):
    """Parsed repository configuration."""
    return RepoConfig.from_dict(sample_config)


def fake_gpg(cmd, capture_output=True, text=True):
    """Stand-in for subprocess.run that produces the gpg artifact."""
    if "--clearsign" in cmd:
        output = Path(cmd[cmd.index("-o") + 1])
        body = Path(cmd[-1]).read_text()
        output.write_text(f"-----BEGIN PGP SIGNED MESSAGE-----\n\n{body}-----BEGIN PGP SIGNATURE-----\n")
    else:
        Path(cmd[-1] + ".asc").write_text("-----BEGIN PGP SIGNATURE-----\n")
    return MagicMock(returncode=0, stdout="", stderr="")


@pytest.fixture
def mock_gpg():
    """Mock the gpg subprocess, producing signature files."""
    with patch("s3apt.core.signer.subprocess.run", side_effect=fake_gpg) as mock_run:
        yield mock_run
