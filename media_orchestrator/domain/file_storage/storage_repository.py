"""
Asset Container Interface

Abstract interface for the blob operations performed on one asset container.
The domain layer depends only on this contract; concrete containers
(Google Cloud Storage, local filesystem) live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List

from .value_objects import ContainerAccessGrant


class IAssetContainer(ABC):
    """
    Blob operations on a single asset container, bound to an access grant.

    Contract Guarantees:
    - Blob names are relative to the container root
    - upload_text() and upload_file() overwrite existing blobs
    - Every operation raises ContainerAccessError once the grant has expired

    Thread Safety:
    - Containers are used by one reconciliation at a time; concurrent
      writers to the same container are not coordinated
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Asset (container) name."""
        pass  # pragma: no cover

    @property
    @abstractmethod
    def grant(self) -> ContainerAccessGrant:
        """Access grant the container was opened with."""
        pass  # pragma: no cover

    @abstractmethod
    def list_blob_names(self) -> List[str]:
        """
        List blob names in the container.

        Returns:
            Blob names relative to the container root
        """
        pass  # pragma: no cover

    @abstractmethod
    def download_text(self, blob_name: str) -> str:
        """
        Download a blob as UTF-8 text.

        Args:
            blob_name: Blob name relative to the container root

        Returns:
            Blob content

        Raises:
            FileNotFoundError: If the blob does not exist
        """
        pass  # pragma: no cover

    @abstractmethod
    def upload_text(self, blob_name: str, text: str) -> None:
        """
        Upload UTF-8 text to a blob, overwriting any existing blob.

        Args:
            blob_name: Blob name relative to the container root
            text: Content to write
        """
        pass  # pragma: no cover

    @abstractmethod
    def upload_file(self, local_path: str, blob_name: str) -> None:
        """
        Upload a local file to a blob, overwriting any existing blob.

        Used for larger payloads staged on disk.

        Args:
            local_path: Path of the local file
            blob_name: Blob name relative to the container root
        """
        pass  # pragma: no cover
