"""
File Storage Value Objects

Immutable value objects for short-lived asset container access.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class ContainerPermission(Enum):
    """Permission set requested for an asset container grant."""
    READ = "Read"
    READ_WRITE = "ReadWrite"
    READ_WRITE_DELETE = "ReadWriteDelete"

    def allows_write(self) -> bool:
        return self in (ContainerPermission.READ_WRITE, ContainerPermission.READ_WRITE_DELETE)


@dataclass(frozen=True)
class ContainerAccessGrant:
    """
    Value object for a short-lived, scoped access grant to an asset container.

    Attributes:
        container_url: Location of the container the grant applies to
        permissions: Granted permission set
        expires_at: Timezone-aware expiry time
    """
    container_url: str
    permissions: ContainerPermission
    expires_at: datetime

    def __post_init__(self):
        if not self.container_url:
            raise ValueError("container_url is required")
        if self.expires_at.tzinfo is None:
            raise ValueError("expires_at must be timezone-aware")

    def is_expired(self) -> bool:
        """Check if the grant has expired."""
        return datetime.now(timezone.utc) >= self.expires_at

    def get_remaining_seconds(self) -> int:
        """Get remaining seconds until expiration."""
        remaining = self.expires_at - datetime.now(timezone.utc)
        return max(0, int(remaining.total_seconds()))

    def to_dict(self) -> dict:
        return {
            "container_url": self.container_url,
            "permissions": self.permissions.value,
            "expires_at": self.expires_at.isoformat(),
            "expires_in": self.get_remaining_seconds(),
        }
