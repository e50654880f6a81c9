"""Tests for image upload and listing endpoints"""

import pytest
from fastapi import status


def image_files(*names):
    return [("images", (name, name.encode(), "image/jpeg")) for name in names]


@pytest.mark.asyncio
class TestUploadProjectImages:
    """Test POST /api/projects/{id}/images"""

    async def test_upload_images(self, async_client, sample_project, fake_object_store):
        """All files stored; failures omitted"""
        response = await async_client.post(
            f"/api/projects/{sample_project.id}/images",
            files=image_files("a.jpg", "b.jpg"),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        base = f"{fake_object_store.bucket_url}/{sample_project.id}"
        assert data["success"] is True
        assert data["status"] == "completed"
        assert data["images"] == [f"{base}/a.jpg", f"{base}/b.jpg"]
        assert "failures" not in data

        project = (await async_client.get(f"/api/projects/{sample_project.id}")).json()
        assert project["images"] == data["images"]

    async def test_upload_partial_failure(self, async_client, sample_project, fake_object_store):
        """Failed files are reported per index while the rest are stored"""
        fake_object_store.fail_on.add(b"b.jpg")

        response = await async_client.post(
            f"/api/projects/{sample_project.id}/images",
            files=image_files("a.jpg", "b.jpg", "c.jpg"),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is False
        assert data["status"] == "partial"
        assert len(data["images"]) == 2
        assert data["failures"] == [{
            "index": 1,
            "filename": "b.jpg",
            "error": "upload_failed",
            "detail": "Failed to upload image: SlowDown",
        }]

    async def test_upload_over_quota(self, async_client, sample_project, image_repository, fake_object_store):
        """A batch over the limit is rejected with the remaining quota"""
        for n in range(4):
            await image_repository.add_image(sample_project.id, f"https://cdn.test/{n}.jpg")

        response = await async_client.post(
            f"/api/projects/{sample_project.id}/images",
            files=image_files("a.jpg", "b.jpg"),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["type"] == "/errors/quota_exceeded"
        assert data["remaining"] == 1
        assert data["limit"] == 5
        assert "Max 5 images" in data["detail"]
        assert fake_object_store.calls == []

    async def test_upload_without_files(self, async_client, sample_project):
        """A request with no files is a 400"""
        response = await async_client.post(f"/api/projects/{sample_project.id}/images")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["detail"] == "No image files uploaded"
        assert data["errors"] == [{"field": "images", "message": "No image files uploaded"}]

    async def test_upload_to_missing_project(self, async_client, fake_object_store):
        response = await async_client.post("/api/projects/999/images", files=image_files("a.jpg"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert fake_object_store.calls == []


@pytest.mark.asyncio
class TestListImages:
    """Test GET /api/images"""

    async def test_list_images(self, async_client, sample_project, image_repository):
        await image_repository.add_image(sample_project.id, "https://cdn.test/a.jpg")

        response = await async_client.get("/api/images")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["project_id"] == sample_project.id
        assert data[0]["image_url"] == "https://cdn.test/a.jpg"
        assert "created_at" in data[0]

    async def test_list_images_empty(self, async_client):
        response = await async_client.get("/api/images")

        assert response.json() == []
