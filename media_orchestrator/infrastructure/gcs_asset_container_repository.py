"""
Google Cloud Storage Asset Container Repository Implementation

Concrete IContainerAccessRepository / IAssetContainer for Google Cloud
Storage. All assets share one bucket; the container of an asset is the
blob prefix '<asset_name>/'. The access grant is a V4 signed URL for
that prefix.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from google.cloud import storage
from google.cloud.exceptions import GoogleCloudError, NotFound

from media_orchestrator.domain.errors import ContainerAccessError
from media_orchestrator.domain.file_storage import (
    ContainerAccessGrant,
    ContainerPermission,
    IAssetContainer,
    IContainerAccessRepository,
)

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = "application/xml"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

_SIGNED_URL_METHODS = {
    ContainerPermission.READ: "GET",
    ContainerPermission.READ_WRITE: "PUT",
    ContainerPermission.READ_WRITE_DELETE: "PUT",
}


def _content_type_for(blob_name: str) -> str:
    return XML_CONTENT_TYPE if ".ism" in blob_name.lower() else TEXT_CONTENT_TYPE


class GCSAssetContainer(IAssetContainer):
    """
    Asset container stored under a prefix of a GCS bucket.

    Thread Safety:
        The GCS client handles concurrent operations safely.

    Attributes:
        bucket: GCS bucket object
        prefix: Blob prefix of this container ('<asset_name>/')
    """

    def __init__(self, bucket: storage.Bucket, asset_name: str, grant: ContainerAccessGrant):
        self.bucket = bucket
        self.prefix = f"{asset_name}/"
        self._name = asset_name
        self._grant = grant

    @property
    def name(self) -> str:
        return self._name

    @property
    def grant(self) -> ContainerAccessGrant:
        return self._grant

    def _check_grant(self, write: bool = False) -> None:
        if self._grant.is_expired():
            raise ContainerAccessError(f"Access grant for container {self._name} has expired")
        if write and not self._grant.permissions.allows_write():
            raise ContainerAccessError(f"Access grant for container {self._name} is read-only")

    def _blob(self, blob_name: str) -> storage.Blob:
        if not blob_name or not blob_name.strip():
            raise ValueError("blob_name cannot be empty")
        return self.bucket.blob(self.prefix + blob_name)

    def list_blob_names(self) -> List[str]:
        self._check_grant()
        try:
            return [
                blob.name[len(self.prefix):]
                for blob in self.bucket.list_blobs(prefix=self.prefix)
                if blob.name != self.prefix
            ]
        except GoogleCloudError as e:
            raise IOError(f"Failed to list container {self._name}: {e}") from e

    def download_text(self, blob_name: str) -> str:
        self._check_grant()
        try:
            return self._blob(blob_name).download_as_text(encoding="utf-8")
        except NotFound as e:
            raise FileNotFoundError(f"Blob not found: {blob_name}") from e
        except GoogleCloudError as e:
            raise IOError(f"Failed to download {blob_name}: {e}") from e

    def upload_text(self, blob_name: str, text: str) -> None:
        self._check_grant(write=True)
        try:
            self._blob(blob_name).upload_from_string(
                text, content_type=_content_type_for(blob_name)
            )
        except GoogleCloudError as e:
            if "403" in str(e) or "permission" in str(e).lower():
                raise PermissionError(f"Insufficient permissions to write to GCS: {e}") from e
            raise IOError(f"Failed to upload {blob_name}: {e}") from e

    def upload_file(self, local_path: str, blob_name: str) -> None:
        self._check_grant(write=True)
        try:
            self._blob(blob_name).upload_from_filename(
                local_path, content_type=_content_type_for(blob_name)
            )
            logger.debug(f"Uploaded {local_path} to gs://{self.bucket.name}/{self.prefix}{blob_name}")
        except GoogleCloudError as e:
            if "403" in str(e) or "permission" in str(e).lower():
                raise PermissionError(f"Insufficient permissions to write to GCS: {e}") from e
            raise IOError(f"Failed to upload {blob_name}: {e}") from e


class GCSContainerAccessRepository(IContainerAccessRepository):
    """
    Issues signed-URL grants for asset prefixes of one GCS bucket.

    Attributes:
        bucket_name: Name of the GCS bucket
        client: Google Cloud Storage client instance
        bucket: GCS bucket object
    """

    def __init__(self, bucket_name: str, client: Optional[storage.Client] = None):
        """
        Initialize the GCS container access repository.

        Args:
            bucket_name: Name of the GCS bucket holding asset containers
            client: Storage client; a default client is created when omitted

        Raises:
            ValueError: If bucket_name is empty
        """
        if not bucket_name or not bucket_name.strip():
            raise ValueError("bucket_name cannot be empty")

        self.bucket_name = bucket_name
        self.client = client or storage.Client()
        self.bucket = self.client.bucket(bucket_name)

    def open_container(
        self,
        asset_name: str,
        permissions: ContainerPermission,
        expires_at: datetime,
    ) -> GCSAssetContainer:
        if not asset_name or not asset_name.strip() or "/" in asset_name:
            raise ContainerAccessError(f"Invalid asset name: {asset_name!r}")
        if expires_at.tzinfo is None or expires_at <= datetime.now(timezone.utc):
            raise ContainerAccessError(f"Grant expiry for {asset_name} must be in the future")

        prefix = f"{asset_name}/"
        try:
            signed_url = self.bucket.blob(prefix).generate_signed_url(
                version="v4",
                expiration=expires_at,
                method=_SIGNED_URL_METHODS[permissions],
            )
        except Exception as e:
            raise ContainerAccessError(
                f"Failed to issue access grant for asset {asset_name}: {e}",
                original_error=e,
            ) from e

        grant = ContainerAccessGrant(
            container_url=signed_url,
            permissions=permissions,
            expires_at=expires_at,
        )
        return GCSAssetContainer(self.bucket, asset_name, grant)
