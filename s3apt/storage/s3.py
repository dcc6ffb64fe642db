# s3apt/storage/s3.py
"""AWS S3 storage backend"""

import logging
from typing import List, Optional, Dict, Any

from .base import StorageBackend
from ..api.exceptions import StorageError
from ..constants import S3_VISIBILITY_ACLS, DEFAULT_VISIBILITY
from ..utils.async_utils import run_in_executor

logger = logging.getLogger(__name__)

# Error codes S3 uses for a missing key
_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Storage(StorageBackend):
    """AWS S3 (and S3-compatible) storage implementation"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize S3 storage

        Args:
            config: S3 configuration including:
                - bucket: S3 bucket name
                - prefix: Key prefix inside the bucket
                - region: AWS region
                - endpoint_url: Custom endpoint (for S3-compatible services)
                - access_key: AWS access key ID
                - secret_key: AWS secret access key
                - visibility: public, private, authenticated or bucket_owner
                - encryption: Request AES256 server-side encryption
        """
        super().__init__(config)
        self.client = None
        self.bucket = self.config.get('bucket')
        self.acl = S3_VISIBILITY_ACLS[self.config.get('visibility') or DEFAULT_VISIBILITY]
        self.encryption = bool(self.config.get('encryption', False))

    async def _do_initialize(self) -> None:
        """Create the S3 client"""
        try:
            import boto3
        except ImportError:
            raise RuntimeError(
                "S3 storage backend requires 'boto3' package. "
                "Install with: pip install boto3"
            )

        session = boto3.session.Session(
            aws_access_key_id=self.config.get('access_key'),
            aws_secret_access_key=self.config.get('secret_key'),
            region_name=self.config.get('region'),
        )
        self.client = session.client('s3', endpoint_url=self.config.get('endpoint_url'))

    @staticmethod
    def _is_not_found(error: Exception) -> bool:
        response = getattr(error, 'response', None) or {}
        return str(response.get('Error', {}).get('Code')) in _NOT_FOUND_CODES

    async def read(self, key: str) -> Optional[bytes]:
        await self.initialize()
        from botocore.exceptions import BotoCoreError, ClientError

        def _read():
            try:
                response = self.client.get_object(Bucket=self.bucket, Key=self.full_key(key))
            except ClientError as e:
                if self._is_not_found(e):
                    return None
                raise StorageError(f"S3 read failed for {key}: {e}") from e
            except BotoCoreError as e:
                raise StorageError(f"S3 read failed for {key}: {e}") from e
            return response['Body'].read()

        return await run_in_executor(_read)

    async def write(self,
                    key: str,
                    data: bytes,
                    content_type: str,
                    cache_control: str = "") -> None:
        await self.initialize()
        from botocore.exceptions import BotoCoreError, ClientError

        params = {
            'Bucket': self.bucket,
            'Key': self.full_key(key),
            'Body': data,
            'ContentType': content_type,
            'ACL': self.acl,
        }
        if cache_control:
            params['CacheControl'] = cache_control
        if self.encryption:
            params['ServerSideEncryption'] = 'AES256'

        def _write():
            try:
                self.client.put_object(**params)
            except (BotoCoreError, ClientError) as e:
                raise StorageError(f"S3 write failed for {key}: {e}") from e

        await run_in_executor(_write)

    async def remove(self, key: str) -> None:
        await self.initialize()
        from botocore.exceptions import BotoCoreError, ClientError

        def _remove():
            try:
                self.client.delete_object(Bucket=self.bucket, Key=self.full_key(key))
            except ClientError as e:
                if not self._is_not_found(e):
                    raise StorageError(f"S3 delete failed for {key}: {e}") from e
            except BotoCoreError as e:
                raise StorageError(f"S3 delete failed for {key}: {e}") from e

        await run_in_executor(_remove)

    async def _head(self, key: str) -> Optional[Dict[str, Any]]:
        await self.initialize()
        from botocore.exceptions import BotoCoreError, ClientError

        def _do_head():
            try:
                return self.client.head_object(Bucket=self.bucket, Key=self.full_key(key))
            except ClientError as e:
                if self._is_not_found(e):
                    return None
                raise StorageError(f"S3 head failed for {key}: {e}") from e
            except BotoCoreError as e:
                raise StorageError(f"S3 head failed for {key}: {e}") from e

        return await run_in_executor(_do_head)

    async def exists(self, key: str) -> bool:
        return await self._head(key) is not None

    async def get_md5(self, key: str) -> Optional[str]:
        """Use the ETag, which is the MD5 digest for single-part uploads"""
        head = await self._head(key)
        if head is None:
            return None

        etag = head.get('ETag', '').strip('"')
        if '-' in etag or self.encryption:
            # Multipart or encrypted objects carry no plain MD5 ETag
            return await super().get_md5(key)
        return etag

    async def list(self, prefix: str = "") -> List[str]:
        await self.initialize()
        from botocore.exceptions import BotoCoreError, ClientError

        strip = len(self.prefix) + 1 if self.prefix else 0

        def _list():
            keys = []
            paginator = self.client.get_paginator('list_objects_v2')
            try:
                for page in paginator.paginate(Bucket=self.bucket, Prefix=self.full_key(prefix)):
                    for obj in page.get('Contents', []):
                        keys.append(obj['Key'][strip:])
            except (BotoCoreError, ClientError) as e:
                raise StorageError(f"S3 list failed for {prefix}: {e}") from e
            return sorted(keys)

        return await run_in_executor(_list)

    async def _do_close(self) -> None:
        """Release the S3 client"""
        self.client = None
