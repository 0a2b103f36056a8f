"""
Application Services Layer

Orchestrates domain services and coordinates use cases.
"""

from .content_protection_service import ContentProtectionService
from .job_monitor_service import JobMonitorService
from .manifest_service import ManifestService
from .reconciliation_result import ReconciliationResult

__all__ = [
    'ContentProtectionService',
    'JobMonitorService',
    'ManifestService',
    'ReconciliationResult',
]
