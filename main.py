"""
main.py

Flask development server for the media orchestrator API.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, celery, redis, requests, PyJWT
  - Infrastructure: Redis server (Celery broker)

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Manifest reconciliation can also run on the Celery worker:
    celery -A celery_app.celery_app worker -Q default,manifest_queue,job_event_queue
"""

from app_factory import create_app
from media_orchestrator.config.settings import Settings

settings = Settings()
app = create_app(settings)

if __name__ == "__main__":
    app.run(host=settings.flask_host, port=settings.flask_port, debug=settings.flask_debug)
