"""
Encoding Services

Domain service for encoding transform management.
"""

from .repositories import IMediaServicesRepository
from .value_objects import Transform, TransformOutput


class EncodingTransformManager:
    """Makes sure the transforms jobs are submitted against exist."""

    def __init__(self, media_services_repository: IMediaServicesRepository):
        self.media_services_repo = media_services_repository

    def ensure_transform_exists(self, transform_name: str, preset: str) -> Transform:
        """
        Create or update a transform with a single output for the preset.

        Args:
            transform_name: Transform name
            preset: Built-in encoder preset name

        Returns:
            Transform as stored by the media service

        Raises:
            ValueError: If the name or preset is empty
            MediaServicesError: If the service rejects the request
        """
        if not transform_name:
            raise ValueError("Transform name is required")

        outputs = [TransformOutput(preset=preset)]
        return self.media_services_repo.create_or_update_transform(transform_name, outputs)
