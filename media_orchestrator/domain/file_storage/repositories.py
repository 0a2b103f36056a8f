"""
File Storage Repositories

Repository interface for issuing asset container access grants.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .storage_repository import IAssetContainer
from .value_objects import ContainerPermission


class IContainerAccessRepository(ABC):
    """Issues short-lived access grants and opens asset containers with them."""

    @abstractmethod
    def open_container(
        self,
        asset_name: str,
        permissions: ContainerPermission,
        expires_at: datetime,
    ) -> IAssetContainer:
        """
        Open the container of an asset under a new access grant.

        Args:
            asset_name: Asset name
            permissions: Requested permission set
            expires_at: Timezone-aware grant expiry

        Returns:
            Container bound to the issued grant

        Raises:
            ContainerAccessError: If the grant cannot be issued
        """
        pass  # pragma: no cover
