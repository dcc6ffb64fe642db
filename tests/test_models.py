"""Tests for checksum, package record and configuration models."""

import hashlib

import pytest

from s3apt.api.exceptions import ConfigError
from s3apt.models import ChecksumFile, PackageRecord, RepoConfig, SigningConfig, StorageConfig


class TestChecksumFile:
    """Tests for ChecksumFile."""

    def test_from_bytes(self):
        data = b"Package: foo\n"
        checksums = ChecksumFile.from_bytes(data)

        assert checksums.size == len(data)
        assert checksums.md5 == hashlib.md5(data).hexdigest()
        assert checksums.sha1 == hashlib.sha1(data).hexdigest()
        assert checksums.sha256 == hashlib.sha256(data).hexdigest()

    def test_empty_content(self):
        checksums = ChecksumFile.from_bytes(b"")

        assert checksums.size == 0
        assert checksums.md5 == "d41d8cd98f00b204e9800998ecf8427e"

    def test_from_file(self, tmp_path):
        path = tmp_path / "blob"
        path.write_bytes(b"x" * 10000)

        checksums = ChecksumFile.from_file(path)

        assert checksums == ChecksumFile.from_bytes(b"x" * 10000)

    def test_digests_skip_missing(self):
        checksums = ChecksumFile(size=3, sha256="ab" * 32)

        assert checksums.digests() == {"sha256": "ab" * 32}
        assert checksums.to_dict() == {"size": 3, "sha256": "ab" * 32}

    def test_get_set(self):
        checksums = ChecksumFile(size=0)
        checksums.set("sha1", "f" * 40)

        assert checksums.get("sha1") == "f" * 40
        assert checksums.get("md5") is None

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            ChecksumFile(size=0).get("sha512")


class TestPackageRecord:
    """Tests for PackageRecord."""

    def test_full_version(self):
        record = PackageRecord(name="foo", version="1.0", architecture="amd64",
                               epoch="2", iteration="3")

        assert record.full_version == "2:1.0-3"
        assert record.version_iteration == "1.0-3"
        assert str(record) == "foo_2:1.0-3_amd64"

    def test_plain_version(self):
        record = PackageRecord(name="foo", version="1.0", architecture="all")

        assert record.full_version == "1.0"

    def test_matches_version_spellings(self):
        record = PackageRecord(name="foo", version="1.0", architecture="amd64",
                               epoch="1", iteration="2")

        assert record.matches_version({"1.0"})
        assert record.matches_version({"1.0-2"})
        assert record.matches_version({"1:1.0-2"})
        assert not record.matches_version({"1.1"})

    def test_generate_field_order(self, record_factory):
        text = record_factory().generate()
        lines = text.splitlines()

        assert lines[0] == "Package: foo"
        assert lines[1] == "Version: 1.0"
        assert lines[2] == "Architecture: amd64"
        assert lines[3].startswith("Maintainer: ")
        assert lines[-5].startswith("Filename: pool/stable/f/fo/")
        assert lines[-4] == "Size: 100"
        assert lines[-1].startswith("SHA256: ")
        assert text.endswith("\n")


class TestConfig:
    """Tests for configuration models."""

    def test_defaults(self):
        config = RepoConfig.from_dict({})

        assert config.storage.type == "s3"
        assert config.repository.codename == "stable"
        assert config.repository.component == "main"
        assert config.repository.architectures == ["amd64"]
        assert config.repository.acquire_by_hash is True
        assert config.signing.enabled is False

    def test_architectures_string(self):
        config = RepoConfig.from_dict({"repository": {"architectures": "amd64 arm64"}})

        assert config.repository.architectures == ["amd64", "arm64"]

    def test_unknown_storage_type(self):
        with pytest.raises(ConfigError):
            StorageConfig(type="ftp")

    def test_invalid_visibility(self):
        with pytest.raises(ConfigError):
            StorageConfig(type="s3", bucket="b", visibility="everyone")

    def test_s3_requires_bucket(self):
        with pytest.raises(ConfigError):
            RepoConfig.from_dict({"storage": {"type": "s3"}}).validate()

    def test_filesystem_requires_path(self):
        with pytest.raises(ConfigError):
            RepoConfig.from_dict({"storage": {"type": "filesystem"}}).validate()

    def test_s3_backend_config_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIA")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")

        backend = StorageConfig(type="s3", bucket="repo", prefix="apt").to_backend_config()

        assert backend["bucket"] == "repo"
        assert backend["prefix"] == "apt"
        assert backend["access_key"] == "AKIA"
        assert backend["secret_key"] == "secret"

    def test_signing_options(self):
        signing = SigningConfig.from_dict({"key": "ABCD", "gpg_options": "--batch --pinentry-mode loopback"})

        assert signing.enabled
        assert signing.option_args == ["--batch", "--pinentry-mode", "loopback"]

    def test_empty_signing_key_enables_default_key(self):
        assert SigningConfig(key="").enabled

    def test_round_trip(self, sample_config):
        config = RepoConfig.from_dict(sample_config)

        assert RepoConfig.from_dict(config.to_dict()) == config

    def test_sections_are_storage_repository_signing(self, sample_config):
        data = dict(sample_config, logging={"level": "DEBUG"})

        config = RepoConfig.from_dict(data)

        assert set(config.to_dict()) == {"storage", "repository", "signing"}
