"""
Manifest Application Service

Coordinates manifest reconciliation for one asset at a time.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from media_orchestrator.domain.errors import (
    ClientManifestNotFoundError,
    ContainerAccessError,
    EmptyClientManifestError,
    ErrorCategory,
    ManifestFormatError,
    MediaServicesError,
)
from media_orchestrator.domain.file_storage import (
    ContainerPermission,
    IContainerAccessRepository,
)
from media_orchestrator.domain.manifests import ManifestReconciler

from .reconciliation_result import ReconciliationResult

logger = logging.getLogger(__name__)


class ManifestService:
    """
    Application service for manifest reconciliation.

    Opens the asset container under a short-lived write grant, runs the
    reconciler and turns per-asset failures into ReconciliationResult
    values so one bad asset never stops a batch.
    """

    def __init__(
        self,
        container_access_repository: IContainerAccessRepository,
        reconciler: ManifestReconciler,
        grant_ttl_minutes: int = 5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize ManifestService.

        Args:
            container_access_repository: Issues container access grants
            reconciler: ManifestReconciler domain service
            grant_ttl_minutes: Lifetime of the write grant
            clock: Returns the current UTC time
        """
        self.container_access_repo = container_access_repository
        self.reconciler = reconciler
        self.grant_ttl = timedelta(minutes=grant_ttl_minutes)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def reconcile_asset_manifests(
        self, asset_name: str, locator_name: Optional[str] = None
    ) -> ReconciliationResult:
        """
        Reconcile the manifests of one asset.

        Args:
            asset_name: Asset to reconcile
            locator_name: Preferred streaming locator, if any

        Returns:
            ReconciliationResult; failures are reported, never raised
        """
        if not asset_name:
            return ReconciliationResult.create_failure(
                asset_name or "", ErrorCategory.INVALID_REQUEST, "Asset name is required"
            )

        logger.info(f"Reconciling manifests for asset {asset_name}")
        expires_at = self.clock() + self.grant_ttl

        try:
            container = self.container_access_repo.open_container(
                asset_name, ContainerPermission.READ_WRITE_DELETE, expires_at
            )
            server_manifests = self.reconciler.reconcile(container, asset_name, locator_name)
        except ContainerAccessError as e:
            logger.warning(f"Container access failed for asset {asset_name}: {e}")
            return ReconciliationResult.create_failure(
                asset_name, ErrorCategory.STORAGE_UNAVAILABLE, str(e)
            )
        except (ClientManifestNotFoundError, MediaServicesError) as e:
            logger.warning(f"Client manifest unavailable for asset {asset_name}: {e}")
            return ReconciliationResult.create_failure(
                asset_name, ErrorCategory.CLIENT_MANIFEST_UNAVAILABLE, str(e)
            )
        except (EmptyClientManifestError, ManifestFormatError, FileNotFoundError) as e:
            logger.warning(f"Manifest reconciliation aborted for asset {asset_name}: {e}")
            return ReconciliationResult.create_failure(
                asset_name, ErrorCategory.MANIFEST_RECONCILIATION_FAILED, str(e)
            )
        except OSError as e:
            logger.warning(f"Storage operation failed for asset {asset_name}: {e}")
            return ReconciliationResult.create_failure(
                asset_name, ErrorCategory.STORAGE_UNAVAILABLE, str(e)
            )
        except Exception as e:
            logger.error(
                f"Unexpected error reconciling manifests for asset {asset_name}: {e}",
                exc_info=True,
            )
            return ReconciliationResult.create_failure(
                asset_name, ErrorCategory.SYSTEM_ERROR, str(e)
            )

        logger.info(
            f"Reconciled asset {asset_name}: {len(server_manifests)} server manifest(s)"
        )
        return ReconciliationResult.create_success(asset_name, server_manifests)
