"""
S3 disk backend.

Objects are stored as ``s3://{bucket}/{root}/{path}``. Works with AWS and
S3-compatible services (MinIO, ...) through ``endpoint_url``.
"""

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, BinaryIO, Dict, Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from media_archive.storage.adapter import BlobWriteError, StorageAdapter, StorageError

logger = logging.getLogger(__name__)


class S3Storage(StorageAdapter):
    """
    S3-based disk implementation.

    The boto3 client is created lazily so constructing a disk never
    performs network I/O.
    """

    def __init__(
        self,
        bucket: str,
        access_key_id: str = "",
        secret_access_key: str = "",
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        url: Optional[str] = None,
        root: str = "",
        client: Any = None,
    ):
        """
        Initialize S3 storage.

        Args:
            bucket: S3 bucket name
            access_key_id: AWS access key ID (empty uses the default credential chain)
            secret_access_key: AWS secret access key
            region: AWS region
            endpoint_url: Custom endpoint for S3-compatible services
            url: Public base URL (CDN); defaults to the bucket's virtual-hosted URL
            root: Key prefix applied to every path
            client: Pre-built boto3 client
        """
        self.bucket = bucket
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.endpoint_url = endpoint_url
        self.base_url = url
        self.root = root.strip("/")
        self._client = client

    @property
    def client(self):
        if self._client is None:
            kwargs: Dict[str, Any] = {"region_name": self.region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            if self.access_key_id:
                kwargs["aws_access_key_id"] = self.access_key_id
                kwargs["aws_secret_access_key"] = self.secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def _key(self, path: str) -> str:
        path = path.lstrip("/")
        return f"{self.root}/{path}" if self.root else path

    def put(self, path: str, stream: BinaryIO) -> bool:
        key = self._key(path)
        try:
            self.client.upload_fileobj(stream, self.bucket, key)
            return True
        except (ClientError, BotoCoreError) as e:
            raise BlobWriteError(f"Failed to upload s3://{self.bucket}/{key}: {e}") from e

    def delete(self, path: str) -> bool:
        # DeleteObject succeeds for missing keys as well
        key = self._key(path)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete s3://{self.bucket}/{key}: {e}") from e

    def exists(self, path: str) -> bool:
        key = self._key(path)
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Failed to check s3://{self.bucket}/{key}: {e}") from e

    def retrieve(self, path: str) -> BinaryIO:
        key = self._key(path)
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return BytesIO(response["Body"].read())
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to retrieve s3://{self.bucket}/{key}: {e}") from e

    def url(self, path: str) -> str:
        key = quote(self._key(path))
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def temporary_url(
        self,
        path: str,
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Presigned GET URL valid until ``expiration``.

        ``options`` are merged into the GetObject parameters, e.g.
        ``{"ResponseContentDisposition": "attachment"}``.
        """
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=timezone.utc)
        expires_in = max(1, int((expiration - datetime.now(timezone.utc)).total_seconds()))

        params: Dict[str, Any] = {"Bucket": self.bucket, "Key": self._key(path)}
        params.update(options or {})
        try:
            return self.client.generate_presigned_url(
                "get_object", Params=params, ExpiresIn=expires_in
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to presign s3://{self.bucket}/{params['Key']}: {e}") from e
