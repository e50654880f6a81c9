"""Tests for the S3 object store client"""

import re

import pytest
from unittest.mock import MagicMock, patch
from botocore.exceptions import ClientError, EndpointConnectionError

from src.config import Settings
from src.services.object_store import (
    ObjectStoreClient,
    ObjectStoreConnectionError,
    ObjectStoreError,
)


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def store(s3_client):
    with patch("src.services.object_store.settings", Settings(aws_region="us-east-1")):
        yield ObjectStoreClient(bucket="test-bucket", folder="projects", s3_client=s3_client)


def client_error(code: str, operation: str = "PutObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestClientSetup:
    """Test boto3 client construction"""

    def test_builds_boto3_client_with_credentials_and_endpoint(self):
        """Credentials and a custom endpoint are passed to boto3"""
        config = Settings(
            aws_region="eu-west-1",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            aws_endpoint_url="http://localhost:9000",
            s3_bucket="portfolio",
        )
        with patch("src.services.object_store.settings", config), \
                patch("src.services.object_store.boto3.client") as mock_client:
            store = ObjectStoreClient()

        args, kwargs = mock_client.call_args
        assert args == ("s3",)
        assert kwargs["region_name"] == "eu-west-1"
        assert kwargs["aws_access_key_id"] == "key"
        assert kwargs["aws_secret_access_key"] == "secret"
        assert kwargs["endpoint_url"] == "http://localhost:9000"
        assert store.bucket == "portfolio"
        assert store.s3_client is mock_client.return_value

    def test_client_failure_raises_connection_error(self):
        """boto3 setup errors become ObjectStoreConnectionError"""
        with patch("src.services.object_store.boto3.client", side_effect=ValueError("bad region")):
            with pytest.raises(ObjectStoreConnectionError, match="bad region"):
                ObjectStoreClient()


class TestFileExtension:
    """Test extension selection"""

    def test_extension_from_filename(self):
        assert ObjectStoreClient.file_extension("Deck.PNG", "image/jpeg") == "png"

    def test_jpeg_normalized(self):
        assert ObjectStoreClient.file_extension("photo.jpeg", None) == "jpg"

    def test_extension_from_content_type(self):
        assert ObjectStoreClient.file_extension("upload", "image/png") == "png"
        assert ObjectStoreClient.file_extension(None, "image/jpeg") == "jpg"

    def test_fallback_extension(self):
        assert ObjectStoreClient.file_extension(None, None) == "bin"


class TestUploadImage:
    """Test uploads"""

    def test_object_key_structure(self, store):
        """Keys are grouped by project and date"""
        key = store.generate_object_key(7, "jpg")

        assert re.fullmatch(
            r"projects/7/\d{4}/\d{2}/\d{2}/[0-9a-f-]{36}\.jpg", key
        )

    def test_object_keys_are_unique(self, store):
        assert store.generate_object_key(7, "jpg") != store.generate_object_key(7, "jpg")

    def test_upload_returns_public_url(self, store, s3_client):
        """Bytes are put into the bucket and the URL is returned"""
        url = store.upload_image(7, b"jpeg-bytes", "image/jpeg", "kitchen.jpg")

        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "test-bucket"
        assert kwargs["Body"] == b"jpeg-bytes"
        assert kwargs["ContentType"] == "image/jpeg"
        assert kwargs["Key"].startswith("projects/7/")
        assert kwargs["Key"].endswith(".jpg")
        assert url == f"https://test-bucket.s3.us-east-1.amazonaws.com/{kwargs['Key']}"

    def test_upload_url_with_custom_endpoint(self, s3_client):
        """MinIO-style endpoints use path-style URLs"""
        config = Settings(aws_endpoint_url="http://localhost:9000/")
        with patch("src.services.object_store.settings", config):
            store = ObjectStoreClient(bucket="test-bucket", folder="projects", s3_client=s3_client)
            url = store.upload_image(7, b"x", "image/png", "a.png")

        assert url.startswith("http://localhost:9000/test-bucket/projects/7/")

    def test_upload_without_content_type(self, store, s3_client):
        """Missing MIME type defaults to a generic binary type"""
        store.upload_image(7, b"x")

        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["ContentType"] == "application/octet-stream"

    def test_upload_client_error(self, store, s3_client):
        """S3 errors are reported with their error code"""
        s3_client.put_object.side_effect = client_error("AccessDenied")

        with pytest.raises(ObjectStoreError, match="AccessDenied"):
            store.upload_image(7, b"x", "image/jpeg", "a.jpg")

    def test_upload_network_error(self, store, s3_client):
        """Transport errors become ObjectStoreError"""
        s3_client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")

        with pytest.raises(ObjectStoreError, match="Failed to upload image"):
            store.upload_image(7, b"x", "image/jpeg", "a.jpg")


class TestCheckConnection:
    """Test bucket reachability check"""

    def test_bucket_reachable(self, store, s3_client):
        store.check_connection()

        s3_client.head_bucket.assert_called_once_with(Bucket="test-bucket")

    def test_bucket_missing(self, store, s3_client):
        s3_client.head_bucket.side_effect = client_error("404", "HeadBucket")

        with pytest.raises(ObjectStoreConnectionError, match="bucket_not_found: test-bucket"):
            store.check_connection()

    def test_bucket_forbidden(self, store, s3_client):
        s3_client.head_bucket.side_effect = client_error("403", "HeadBucket")

        with pytest.raises(ObjectStoreConnectionError, match="disconnected: 403"):
            store.check_connection()

    def test_endpoint_unreachable(self, store, s3_client):
        s3_client.head_bucket.side_effect = EndpointConnectionError(endpoint_url="https://s3")

        with pytest.raises(ObjectStoreConnectionError, match="disconnected"):
            store.check_connection()
