"""Tests for storage backends."""

import hashlib
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from s3apt.api.exceptions import ConfigError, ConflictError, StorageError
from s3apt.models import StorageConfig
from s3apt.storage import FileSystemStorage, MemoryStorage, S3Storage, StorageFactory


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    @pytest.mark.asyncio
    async def test_write_read_remove(self, storage):
        await storage.write("dists/stable/Release", b"data", "text/plain")

        assert await storage.read("dists/stable/Release") == b"data"
        assert await storage.exists("dists/stable/Release")

        await storage.remove("dists/stable/Release")

        assert await storage.read("dists/stable/Release") is None
        assert storage.operations == [
            ("write", "dists/stable/Release"),
            ("remove", "dists/stable/Release"),
        ]

    @pytest.mark.asyncio
    async def test_prefix(self):
        storage = MemoryStorage({"prefix": "/apt/"})
        await storage.write("pool/a.deb", b"a", "application/octet-stream")

        assert "apt/pool/a.deb" in storage.objects
        assert await storage.list("pool") == ["pool/a.deb"]

    @pytest.mark.asyncio
    async def test_store_identical_is_noop(self, storage):
        await storage.store("pool/a.deb", b"same", "application/octet-stream")
        await storage.store("pool/a.deb", b"same", "application/octet-stream", fail_if_exists=True)

        assert storage.written_keys() == ["pool/a.deb"]

    @pytest.mark.asyncio
    async def test_store_conflict(self, storage):
        await storage.store("pool/a.deb", b"one", "application/octet-stream")

        with pytest.raises(ConflictError) as exc_info:
            await storage.store("pool/a.deb", b"two", "application/octet-stream", fail_if_exists=True)

        assert exc_info.value.key == "pool/a.deb"
        assert await storage.read("pool/a.deb") == b"one"

    @pytest.mark.asyncio
    async def test_store_overwrites_without_fail_if_exists(self, storage):
        await storage.store("dists/stable/main/binary-amd64/Packages", b"one", "text/plain")
        await storage.store("dists/stable/main/binary-amd64/Packages", b"two", "text/plain")

        assert await storage.read("dists/stable/main/binary-amd64/Packages") == b"two"

    @pytest.mark.asyncio
    async def test_store_file(self, storage, tmp_path):
        path = tmp_path / "a.deb"
        path.write_bytes(b"package")

        await storage.store_file(path, "pool/a.deb", "application/octet-stream", "max-age=60")

        assert storage.objects["pool/a.deb"].data == b"package"
        assert storage.objects["pool/a.deb"].cache_control == "max-age=60"


class TestFileSystemStorage:
    """Tests for FileSystemStorage."""

    def test_requires_path(self):
        with pytest.raises(ConfigError):
            FileSystemStorage({})

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        async with FileSystemStorage({"path": str(tmp_path), "prefix": "repo"}) as storage:
            await storage.write("dists/stable/Release", b"release", "text/plain")

            assert (tmp_path / "repo" / "dists" / "stable" / "Release").read_bytes() == b"release"
            assert await storage.read("dists/stable/Release") == b"release"
            assert await storage.read("dists/stable/InRelease") is None
            assert await storage.list("dists") == ["dists/stable/Release"]

            await storage.remove("dists/stable/Release")
            await storage.remove("dists/stable/Release")

            assert not await storage.exists("dists/stable/Release")

    @pytest.mark.asyncio
    async def test_no_partial_files_left(self, tmp_path):
        storage = FileSystemStorage({"path": str(tmp_path)})
        await storage.write("pool/a.deb", b"x", "application/octet-stream")

        assert [p.name for p in (tmp_path / "pool").iterdir()] == ["a.deb"]

    @pytest.mark.asyncio
    async def test_store_conflict(self, tmp_path):
        storage = FileSystemStorage({"path": str(tmp_path)})
        await storage.store("pool/a.deb", b"one", "application/octet-stream")

        with pytest.raises(ConflictError):
            await storage.store("pool/a.deb", b"two", "application/octet-stream", fail_if_exists=True)


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "operation")


class TestS3Storage:
    """Tests for S3Storage with a mocked client."""

    @pytest.fixture
    def s3(self):
        storage = S3Storage({
            "bucket": "repo",
            "prefix": "apt",
            "visibility": "private",
            "encryption": True,
        })
        storage.client = MagicMock()
        storage._initialized = True
        return storage

    @pytest.mark.asyncio
    async def test_write_parameters(self, s3):
        await s3.write("dists/stable/Release", b"data", "text/plain; charset=utf-8", "max-age=60")

        s3.client.put_object.assert_called_once_with(
            Bucket="repo",
            Key="apt/dists/stable/Release",
            Body=b"data",
            ContentType="text/plain; charset=utf-8",
            ACL="private",
            CacheControl="max-age=60",
            ServerSideEncryption="AES256",
        )

    @pytest.mark.asyncio
    async def test_read_missing(self, s3):
        s3.client.get_object.side_effect = _client_error("NoSuchKey")

        assert await s3.read("dists/stable/Release") is None

    @pytest.mark.asyncio
    async def test_read_error(self, s3):
        s3.client.get_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(StorageError):
            await s3.read("dists/stable/Release")

    @pytest.mark.asyncio
    async def test_remove_missing_is_ignored(self, s3):
        s3.client.delete_object.side_effect = _client_error("404")

        await s3.remove("dists/stable/Release.gpg")

    @pytest.mark.asyncio
    async def test_get_md5_from_etag(self):
        s3 = S3Storage({"bucket": "repo"})
        s3.client = MagicMock()
        s3._initialized = True
        s3.client.head_object.return_value = {"ETag": '"5d41402abc4b2a76b9719d911017c592"'}

        assert await s3.get_md5("pool/a.deb") == "5d41402abc4b2a76b9719d911017c592"

    @pytest.mark.asyncio
    async def test_get_md5_encrypted_reads_content(self, s3):
        s3.client.head_object.return_value = {"ETag": '"opaque"'}
        body = MagicMock()
        body.read.return_value = b"hello"
        s3.client.get_object.return_value = {"Body": body}

        assert await s3.get_md5("pool/a.deb") == hashlib.md5(b"hello").hexdigest()

    @pytest.mark.asyncio
    async def test_list_strips_prefix(self, s3):
        paginator = MagicMock()
        paginator.paginate.return_value = [
            {"Contents": [{"Key": "apt/pool/b.deb"}, {"Key": "apt/pool/a.deb"}]},
            {},
        ]
        s3.client.get_paginator.return_value = paginator

        assert await s3.list("pool") == ["pool/a.deb", "pool/b.deb"]
        paginator.paginate.assert_called_once_with(Bucket="repo", Prefix="apt/pool")


class TestStorageFactory:
    """Tests for StorageFactory."""

    def test_create_memory(self):
        backend = StorageFactory.create_from_config(StorageConfig(type="memory"))

        assert isinstance(backend, MemoryStorage)

    def test_create_filesystem(self, tmp_path):
        backend = StorageFactory.create_from_config(StorageConfig(type="filesystem", path=str(tmp_path)))

        assert isinstance(backend, FileSystemStorage)
        assert backend.base_path == tmp_path

    def test_create_s3_requires_bucket(self):
        with pytest.raises(ConfigError):
            StorageFactory.create_from_config(StorageConfig(type="s3"))

    def test_invalid_type(self):
        with pytest.raises(ConfigError):
            StorageFactory.create_from_dict("ftp", {})

    def test_supported_types(self):
        assert set(StorageFactory.get_supported_types()) >= {"memory", "filesystem", "s3"}
