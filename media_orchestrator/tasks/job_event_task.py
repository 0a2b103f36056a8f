"""
Job Output Event Task

Celery task evaluating a job-output state-change event for retry.
"""

import logging
from typing import Any, Dict

from celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="media_orchestrator.tasks.evaluate_job_output_event")
def evaluate_job_output_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate one job-output state-change event.

    Args:
        event: Event envelope or its data section

    Returns:
        dict: asset_name, state, retriable, terminal; malformed events also carry 'error'
    """
    from celery_app import flask_app
    from media_orchestrator.application.job_monitor_service import JobMonitorService

    job_monitor = flask_app.container.resolve(JobMonitorService)

    try:
        return job_monitor.evaluate_output_event(event)
    except ValueError as e:
        logger.warning(f"Discarding malformed job output event: {e}")
        return {
            "asset_name": None,
            "state": None,
            "retriable": False,
            "terminal": False,
            "error": str(e),
        }
