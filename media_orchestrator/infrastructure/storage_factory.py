"""
Storage Factory

Factory for creating the container access repository implementation based
on environment. Selects between the local filesystem and Google Cloud
Storage so the application layer depends only on IContainerAccessRepository.
"""

import logging
import os

from media_orchestrator.domain.file_storage import IContainerAccessRepository
from media_orchestrator.infrastructure.local_asset_container_repository import (
    LocalContainerAccessRepository,
)

logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for container access repository implementations.

    Selection Logic:
    - If GCS_BUCKET_NAME is configured, attempt to use GCS storage
    - Otherwise, fall back to local filesystem storage
    """

    @staticmethod
    def create_container_access() -> IContainerAccessRepository:
        """
        Create container access repository based on environment configuration.

        Returns:
            IContainerAccessRepository implementation (either local or GCS)

        Environment Variables:
            GCS_BUCKET_NAME: If set, enables GCS storage
            ASSET_STORAGE_DIR: Base directory for local storage (default: /tmp/media-orchestrator)
            GOOGLE_APPLICATION_CREDENTIALS: Path to GCS service account key (optional)
        """
        gcs_bucket_name = os.getenv("GCS_BUCKET_NAME")

        if gcs_bucket_name:
            return StorageFactory._create_gcs_storage(gcs_bucket_name)
        return StorageFactory._create_local_storage()

    @staticmethod
    def _create_local_storage() -> IContainerAccessRepository:
        """
        Create local filesystem container access repository.

        Raises:
            RuntimeError: If local storage initialization fails
        """
        try:
            storage_dir = os.getenv("ASSET_STORAGE_DIR", "/tmp/media-orchestrator")
            repository = LocalContainerAccessRepository(storage_dir)

            logger.info(f"Storage factory: Using local filesystem storage at {storage_dir}")
            return repository

        except Exception as e:
            raise RuntimeError(f"Failed to initialize local storage: {e}") from e

    @staticmethod
    def _create_gcs_storage(bucket_name: str) -> IContainerAccessRepository:
        """
        Create Google Cloud Storage container access repository.

        Falls back to local storage when the GCS client cannot be created.

        Raises:
            ValueError: If bucket_name is empty
        """
        if not bucket_name or not bucket_name.strip():
            raise ValueError("GCS_BUCKET_NAME cannot be empty")

        try:
            from media_orchestrator.config.gcs_config import create_gcs_client
            from media_orchestrator.infrastructure.gcs_asset_container_repository import (
                GCSContainerAccessRepository,
            )

            repository = GCSContainerAccessRepository(bucket_name, client=create_gcs_client())
            logger.info(f"Storage factory: Using GCS storage with bucket {bucket_name}")
            return repository

        except Exception as e:
            logger.warning(f"Failed to initialize GCS storage: {e}")
            logger.warning("Falling back to local filesystem storage")
            return StorageFactory._create_local_storage()
