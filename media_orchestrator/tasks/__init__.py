"""
Celery Tasks

This module contains all Celery tasks for the media orchestrator.
"""

from .job_event_task import evaluate_job_output_event
from .reconcile_task import reconcile_manifests

__all__ = ['evaluate_job_output_event', 'reconcile_manifests']
