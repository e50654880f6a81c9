"""Upload orchestrator: quota-checked, concurrent image uploads for a project"""

import asyncio
import functools
import logging
import time
import weakref
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional, Union

from src.config import settings
from src.monitoring.metrics import metrics_collector
from src.schemas.image import (
    BatchStatus,
    ImagePayload,
    ImageUploadFailure,
    ImageUploadResponse,
    UploadedImage,
    UploadStatus,
)
from src.services.errors import (
    InputValidationError,
    NotFoundError,
    PersistFailedError,
    QuotaExceededError,
    UploadFailedError,
)
from src.services.image_repository import ImageRepository
from src.services.object_store import ObjectStoreClient
from src.services.project_repository import ProjectRepository

logger = logging.getLogger(__name__)

FileOutcome = Union[UploadedImage, ImageUploadFailure]


class ProjectLocks:
    """
    Per-project asyncio locks.

    Entries disappear once no coroutine holds a reference to the lock.
    Only serializes batches inside one process.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def for_project(self, project_id: int) -> asyncio.Lock:
        lock = self._locks.get(project_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[project_id] = lock
        return lock


# Shared by every orchestrator in the process
project_upload_locks = ProjectLocks()

# Blocking uploads run here, apart from the loop's default executor
upload_executor = ThreadPoolExecutor(
    max_workers=settings.upload_max_workers, thread_name_prefix="image-upload"
)


class UploadOrchestrator:
    """
    Attaches a batch of images to a project.

    The quota is checked once for the whole batch before any upload. Each
    file is then uploaded and stored independently; files that succeed stay
    stored even when others in the batch fail.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        image_repository: ImageRepository,
        object_store: ObjectStoreClient,
        max_images: Optional[int] = None,
        upload_timeout: Optional[float] = None,
        locks: Optional[ProjectLocks] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            project_repository: Used to verify the project exists
            image_repository: Counts and stores image records
            object_store: Uploads file bytes and returns URLs
            max_images: Per-project image limit (default: settings)
            upload_timeout: Per-file upload timeout in seconds (default: settings)
            locks: Per-project lock registry (default: process-wide registry)
            executor: Thread pool for blocking uploads (default: shared upload pool)
        """
        self.project_repository = project_repository
        self.image_repository = image_repository
        self.object_store = object_store
        self.max_images = max_images if max_images is not None else settings.max_images_per_project
        self.upload_timeout = (
            upload_timeout if upload_timeout is not None else settings.upload_timeout_seconds
        )
        self.locks = locks or project_upload_locks
        self.executor = executor or upload_executor

    async def upload_batch(
        self, project_id: int, files: List[ImagePayload]
    ) -> ImageUploadResponse:
        """
        Upload and attach a batch of images.

        Args:
            project_id: Target project
            files: Files in request order

        Returns:
            ImageUploadResponse with stored URLs and per-file failures

        Raises:
            InputValidationError: No files were submitted
            NotFoundError: Project does not exist
            QuotaExceededError: Batch would exceed the image limit; nothing uploaded
            StorageError: Project lookup or image count failed
        """
        if not files:
            raise InputValidationError("No image files uploaded")

        project = await self.project_repository.get(project_id)
        if project is None:
            raise NotFoundError(f"Project with id {project_id} not found")

        async with self.locks.for_project(project_id):
            current = await self.image_repository.count_images(project_id)
            if current + len(files) > self.max_images:
                metrics_collector.record_batch(BatchStatus.REJECTED.value, len(files))
                logger.info(
                    f"Rejected {len(files)} images for project {project_id}: "
                    f"{current} of {self.max_images} already attached"
                )
                raise QuotaExceededError(
                    limit=self.max_images, current=current, requested=len(files)
                )

            logger.info(
                f"Uploading {len(files)} images for project {project_id} "
                f"({current} already attached)"
            )

            # One slot per input index; _upload_one never raises
            outcomes: List[FileOutcome] = await asyncio.gather(
                *(
                    self._upload_one(project_id, index, payload)
                    for index, payload in enumerate(files)
                )
            )

        response = self._aggregate(outcomes)
        metrics_collector.record_batch(response.status.value, len(files))
        logger.info(
            f"Batch for project {project_id} finished with status {response.status.value}: "
            f"{len(response.uploaded)} stored, {len(response.failures or [])} failed"
        )
        return response

    async def _upload_one(
        self, project_id: int, index: int, payload: ImagePayload
    ) -> FileOutcome:
        """Upload then persist one file, capturing any failure as an outcome"""
        start_time = time.time()
        outcome: FileOutcome

        try:
            url = await self._upload(project_id, index, payload)
            await self._persist(project_id, index, url)
            outcome = UploadedImage(index=index, url=url)
            status = UploadStatus.UPLOADED
        except (UploadFailedError, PersistFailedError) as e:
            status = (
                UploadStatus.UPLOAD_FAILED
                if isinstance(e, UploadFailedError)
                else UploadStatus.PERSIST_FAILED
            )
            outcome = ImageUploadFailure(
                index=index,
                filename=payload.filename,
                error=status,
                detail=str(e),
            )

        metrics_collector.record_file_upload(status.value, time.time() - start_time)
        return outcome

    async def _upload(self, project_id: int, index: int, payload: ImagePayload) -> str:
        """Send bytes to the object store under the per-file timeout"""
        try:
            loop = asyncio.get_running_loop()
            return await asyncio.wait_for(
                loop.run_in_executor(
                    self.executor,
                    functools.partial(
                        self.object_store.upload_image,
                        project_id,
                        payload.data,
                        payload.content_type,
                        payload.filename,
                    ),
                ),
                timeout=self.upload_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"Upload of file {index} for project {project_id} timed out "
                f"after {self.upload_timeout}s"
            )
            raise UploadFailedError(
                f"Upload timed out after {self.upload_timeout} seconds"
            ) from e
        except Exception as e:
            logger.error(f"Upload of file {index} for project {project_id} failed: {e}")
            raise UploadFailedError(str(e) or e.__class__.__name__) from e

    async def _persist(self, project_id: int, index: int, url: str) -> None:
        """Store the image row; the remote object is left orphaned on failure"""
        try:
            await self.image_repository.add_image(project_id, url)
        except Exception as e:
            logger.error(
                f"Stored file {index} at {url} but could not record it for "
                f"project {project_id}: {e}"
            )
            raise PersistFailedError(str(e), url=url) from e

    @staticmethod
    def _aggregate(outcomes: List[FileOutcome]) -> ImageUploadResponse:
        """Split outcomes into stored images and failures, keeping input order"""
        uploaded = [o for o in outcomes if isinstance(o, UploadedImage)]
        failures = [o for o in outcomes if isinstance(o, ImageUploadFailure)]

        if not failures:
            status = BatchStatus.COMPLETED
        elif uploaded:
            status = BatchStatus.PARTIAL
        else:
            status = BatchStatus.FAILED

        return ImageUploadResponse(
            success=not failures,
            status=status,
            images=[image.url for image in uploaded],
            uploaded=uploaded,
            failures=failures or None,
        )
