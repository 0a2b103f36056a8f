"""
Local Asset Container Repository Implementation

Concrete IContainerAccessRepository / IAssetContainer for the local
filesystem: one directory per asset under a base path. Used for
development and tests.
"""

import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from media_orchestrator.domain.errors import ContainerAccessError
from media_orchestrator.domain.file_storage import (
    ContainerAccessGrant,
    ContainerPermission,
    IAssetContainer,
    IContainerAccessRepository,
)


def _check_asset_name(asset_name: str) -> None:
    if not asset_name or not asset_name.strip():
        raise ContainerAccessError("Asset name cannot be empty")
    if "/" in asset_name or "\\" in asset_name or asset_name in (".", ".."):
        raise ContainerAccessError(f"Invalid asset name: {asset_name}")


class LocalAssetContainer(IAssetContainer):
    """
    Asset container backed by a local directory.

    Attributes:
        root: Directory holding the asset's blobs
    """

    def __init__(self, root: Path, asset_name: str, grant: ContainerAccessGrant):
        self.root = root
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

    def _resolve(self, blob_name: str) -> Path:
        if not blob_name or not blob_name.strip():
            raise ValueError("blob_name cannot be empty")
        path = (self.root / blob_name).resolve()
        root = self.root.resolve()
        if root != path and root not in path.parents:
            raise ValueError(f"Blob name escapes the container: {blob_name}")
        return path

    def list_blob_names(self) -> List[str]:
        self._check_grant()
        if not self.root.exists():
            return []
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file()
        )

    def download_text(self, blob_name: str) -> str:
        self._check_grant()
        path = self._resolve(blob_name)
        if not path.is_file():
            raise FileNotFoundError(f"Blob not found: {blob_name}")
        return path.read_text(encoding="utf-8")

    def upload_text(self, blob_name: str, text: str) -> None:
        self._check_grant(write=True)
        path = self._resolve(blob_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    def upload_file(self, local_path: str, blob_name: str) -> None:
        self._check_grant(write=True)
        path = self._resolve(blob_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local_path, path)


class LocalContainerAccessRepository(IContainerAccessRepository):
    """
    Issues grants for asset directories under base_path.

    Attributes:
        base_path: Base directory; each asset container is base_path/<asset_name>
    """

    def __init__(self, base_path: str = "/tmp/media-orchestrator"):
        """
        Initialize the local container access repository.

        Args:
            base_path: Base directory for asset containers

        Raises:
            PermissionError: If the base directory cannot be created
            OSError: If directory creation fails for other reasons
        """
        self.base_path = Path(base_path)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(f"Failed to create storage directory: {self.base_path}") from e

    def open_container(
        self,
        asset_name: str,
        permissions: ContainerPermission,
        expires_at: datetime,
    ) -> LocalAssetContainer:
        _check_asset_name(asset_name)
        if expires_at.tzinfo is None or expires_at <= datetime.now(timezone.utc):
            raise ContainerAccessError(f"Grant expiry for {asset_name} must be in the future")

        root = self.base_path / asset_name
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ContainerAccessError(
                f"Could not open container for asset {asset_name}: {e}", original_error=e
            ) from e

        grant = ContainerAccessGrant(
            container_url=root.resolve().as_uri(),
            permissions=permissions,
            expires_at=expires_at,
        )
        return LocalAssetContainer(root, asset_name, grant)
