"""
Outcome of reconciling one asset, as returned by ManifestService and the
reconcile_manifests task.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from media_orchestrator.domain.errors import ErrorCategory


@dataclass
class ReconciliationResult:
    """
    Value object representing the result of a manifest reconciliation.

    A failure aborts only the asset it was computed for.
    """

    success: bool
    asset_name: str
    server_manifests: List[str] = field(default_factory=list)
    error_type: Optional[ErrorCategory] = None
    error_message: Optional[str] = None

    @classmethod
    def create_success(cls, asset_name: str, server_manifests: List[str]) -> 'ReconciliationResult':
        """
        Create a successful reconciliation result.

        Args:
            asset_name: Reconciled asset
            server_manifests: Server manifest names present after reconciliation

        Returns:
            ReconciliationResult indicating success
        """
        return cls(
            success=True,
            asset_name=asset_name,
            server_manifests=list(server_manifests),
        )

    @classmethod
    def create_failure(
        cls,
        asset_name: str,
        error_type: ErrorCategory,
        error_message: str
    ) -> 'ReconciliationResult':
        """
        Create a failed reconciliation result.

        Args:
            asset_name: Asset that could not be reconciled
            error_type: Category of error that occurred
            error_message: Technical error message

        Returns:
            ReconciliationResult indicating failure
        """
        return cls(
            success=False,
            asset_name=asset_name,
            error_type=error_type,
            error_message=error_message,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form returned by the Celery task."""
        return {
            'success': self.success,
            'asset_name': self.asset_name,
            'server_manifests': list(self.server_manifests),
            'error_message': self.error_message,
            'error_type': self.error_type.value if self.error_type else None,
        }
