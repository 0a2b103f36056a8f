"""
Celery Configuration

Redis-brokered Celery bound to the Flask application context. Each task
gets its own queue so reconciliations never wait behind event bursts.
"""

import os

from celery import Celery
from kombu import Queue

REDIS_DEFAULT_URL = "redis://localhost:6379/0"

# task name -> (queue, routing key)
TASK_QUEUES = {
    "media_orchestrator.tasks.reconcile_manifests": ("manifest_queue", "manifest"),
    "media_orchestrator.tasks.evaluate_job_output_event": ("job_event_queue", "job_event"),
}


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


class CeleryConfig:
    """Celery settings read from the environment at import time."""

    broker_url = os.getenv("CELERY_BROKER_URL", REDIS_DEFAULT_URL)
    result_backend = os.getenv("CELERY_RESULT_BACKEND", REDIS_DEFAULT_URL)
    result_expires = 3600

    task_serializer = result_serializer = "json"
    accept_content = ["json"]
    enable_utc = True
    timezone = "UTC"

    # A reconciliation holds a container grant; one per worker slot, acked
    # only once it has finished
    worker_prefetch_multiplier = 1
    worker_concurrency = _env_int("CELERY_WORKER_CONCURRENCY", 2)
    worker_max_tasks_per_child = 100
    task_acks_late = True

    task_soft_time_limit = _env_int("CELERY_TASK_SOFT_TIME_LIMIT", 300)
    task_time_limit = _env_int("CELERY_TASK_TIME_LIMIT", 360)

    task_default_queue = "default"
    task_routes = {task: {"queue": queue} for task, (queue, _) in TASK_QUEUES.items()}
    task_queues = (Queue("default", routing_key="default"),) + tuple(
        Queue(queue, routing_key=key) for queue, key in TASK_QUEUES.values()
    )


def make_celery(app) -> Celery:
    """
    Build the Celery app for a Flask application.

    Tasks run inside app.app_context(), so they can reach the services the
    factory attached to the app.
    """
    celery = Celery(app.import_name, broker=CeleryConfig.broker_url, backend=CeleryConfig.result_backend)
    celery.config_from_object(CeleryConfig)

    base_task = celery.Task

    class AppContextTask(base_task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = AppContextTask
    return celery
