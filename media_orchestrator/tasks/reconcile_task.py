"""
Manifest Reconciliation Task

Celery task for background manifest reconciliation.
Thin wrapper that delegates to ManifestService.
"""

import logging
from typing import Any, Dict, Optional

from celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="media_orchestrator.tasks.reconcile_manifests")
def reconcile_manifests(self, asset_name: str, locator_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Reconcile the manifests of one asset.

    Resolves ManifestService from the DependencyContainer; failures are
    reported in the result, never raised.

    Args:
        asset_name: Asset to reconcile
        locator_name: Preferred streaming locator, if any

    Returns:
        dict: success, asset_name, server_manifests, error_message, error_type
    """
    from celery_app import flask_app
    from media_orchestrator.application.manifest_service import ManifestService

    logger.info(f"Task started: reconcile manifests for asset {asset_name}")

    manifest_service = flask_app.container.resolve(ManifestService)
    result = manifest_service.reconcile_asset_manifests(asset_name, locator_name)

    if result.success:
        logger.info(f"Task completed for asset {asset_name}")
    else:
        logger.warning(
            f"Task failed for asset {asset_name}: "
            f"{result.error_type.value if result.error_type else 'unknown'}"
        )

    return result.to_dict()
