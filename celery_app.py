"""
Celery worker entry point.

    celery -A celery_app.celery_app worker -Q default,manifest_queue,job_event_queue

The Flask app is built through the factory so tasks resolve the same
services as the API.
"""

from app_factory import create_app

flask_app = create_app()
celery_app = flask_app.celery

# Listed by name: the task modules import celery_app themselves
celery_app.conf.imports = (
    "media_orchestrator.tasks.reconcile_task",
    "media_orchestrator.tasks.job_event_task",
)
