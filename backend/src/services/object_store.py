"""Object store client for project image uploads (S3 compatible)"""

import logging
import mimetypes
from datetime import datetime
from typing import Optional
from uuid import uuid4

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.config import settings

logger = logging.getLogger(__name__)


class ObjectStoreError(Exception):
    """Base exception for object store errors"""
    pass


class ObjectStoreConnectionError(ObjectStoreError):
    """Object store could not be reached or configured"""
    pass


class ObjectStoreClient:
    """Uploads image bytes to the bucket and returns their public URL"""

    DEFAULT_EXTENSION = "bin"

    def __init__(
        self,
        bucket: Optional[str] = None,
        folder: Optional[str] = None,
        s3_client=None,
    ):
        """
        Initialize S3 client with retry configuration.

        Args:
            bucket: Bucket name (defaults to settings.s3_bucket)
            folder: Key prefix for project images (defaults to settings.s3_folder)
            s3_client: Pre-built boto3 client, mainly for tests
        """
        self.bucket = bucket or settings.s3_bucket
        self.folder = (folder if folder is not None else settings.s3_folder).strip("/")

        if s3_client is not None:
            self.s3_client = s3_client
            return

        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Use custom endpoint for local development (MinIO)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {self.bucket}")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise ObjectStoreConnectionError(f"Failed to initialize S3 client: {e}")

    @classmethod
    def file_extension(cls, filename: Optional[str], content_type: Optional[str]) -> str:
        """
        Pick a file extension from the original filename, falling back to
        the MIME type.
        """
        if filename and "." in filename:
            extension = filename.rsplit(".", 1)[1].lower()
            if extension:
                return "jpg" if extension == "jpeg" else extension

        if content_type:
            guessed = mimetypes.guess_extension(content_type)
            if guessed:
                guessed = guessed.lstrip(".")
                return "jpg" if guessed in ("jpe", "jpeg") else guessed

        return cls.DEFAULT_EXTENSION

    def generate_object_key(self, project_id: int, file_extension: str) -> str:
        """
        Generate object key following the structure:
        {folder}/{project_id}/{year}/{month}/{day}/{uuid}.{extension}
        """
        now = datetime.utcnow()
        name = f"{project_id}/{now:%Y/%m/%d}/{uuid4()}.{file_extension}"
        return f"{self.folder}/{name}" if self.folder else name

    def object_url(self, key: str) -> str:
        """Public URL of an object in the bucket"""
        if settings.aws_endpoint_url:
            # For local development with MinIO
            return f"{settings.aws_endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"

    def upload_image(
        self,
        project_id: int,
        file_bytes: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> str:
        """
        Upload one image and return its URL.

        Blocking; callers on the event loop run it in a worker thread.

        Raises:
            ObjectStoreError: If the upload fails
        """
        content_type = content_type or "application/octet-stream"
        key = self.generate_object_key(
            project_id, self.file_extension(filename, content_type)
        )

        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=file_bytes,
                ContentType=content_type,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Error uploading {key}: {error_code} - {e}")
            raise ObjectStoreError(f"Failed to upload image: {error_code}") from e
        except BotoCoreError as e:
            logger.error(f"Error uploading {key}: {e}")
            raise ObjectStoreError(f"Failed to upload image: {e}") from e

        url = self.object_url(key)
        logger.info(f"Uploaded {len(file_bytes)} bytes to {url}")
        return url

    def check_connection(self) -> None:
        """
        Verify the bucket is reachable.

        Raises:
            ObjectStoreConnectionError: If the bucket cannot be reached
        """
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "404":
                raise ObjectStoreConnectionError(f"bucket_not_found: {self.bucket}") from e
            raise ObjectStoreConnectionError(f"disconnected: {error_code}") from e
        except BotoCoreError as e:
            raise ObjectStoreConnectionError(f"disconnected: {e}") from e
