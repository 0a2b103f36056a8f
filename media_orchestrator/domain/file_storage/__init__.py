"""
File Storage Domain

Short-lived access to asset containers and the blob operations used on them.
"""

from .repositories import IContainerAccessRepository
from .storage_repository import IAssetContainer
from .value_objects import ContainerAccessGrant, ContainerPermission

__all__ = [
    "ContainerAccessGrant",
    "ContainerPermission",
    "IAssetContainer",
    "IContainerAccessRepository",
]
