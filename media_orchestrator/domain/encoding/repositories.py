"""
Encoding Repositories

Repository interface over the media service management API.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from media_orchestrator.domain.content_protection.value_objects import (
    ContentKeyPolicy,
    ContentKeyPolicyOption,
)

from .value_objects import Asset, Transform, TransformOutput


class IMediaServicesRepository(ABC):
    """
    Management operations on the media account.

    All writes are create-or-update: calling them twice with the same
    arguments leaves the account in the same state.
    """

    @abstractmethod
    def create_or_update_transform(
        self, transform_name: str, outputs: List[TransformOutput]
    ) -> Transform:
        """
        Create or update a transform.

        Raises:
            MediaServicesError: If the service rejects the request
        """
        pass  # pragma: no cover

    @abstractmethod
    def create_or_update_content_key_policy(
        self, policy_name: str, options: List[ContentKeyPolicyOption]
    ) -> ContentKeyPolicy:
        """
        Create or update a content key policy.

        Raises:
            MediaServicesError: If the service rejects the request
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_asset(self, asset_name: str) -> Optional[Asset]:
        """
        Get an asset by name.

        Returns:
            Asset, or None if the asset does not exist
        """
        pass  # pragma: no cover
