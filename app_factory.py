"""
Builds the Flask application: CORS, Redis and Celery, the service
container, the versioned API blueprint and the health endpoint.

Both the API process (main.py) and the Celery worker (celery_app.py) go
through create_app(), so they share one wiring.
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from media_orchestrator.application.content_protection_service import ContentProtectionService
from media_orchestrator.application.dependency_container import DependencyContainer
from media_orchestrator.application.job_monitor_service import JobMonitorService
from media_orchestrator.application.manifest_service import ManifestService
from media_orchestrator.config.celery_config import make_celery
from media_orchestrator.config.logging_config import configure_logging
from media_orchestrator.config.redis_config import init_redis, redis_health_check
from media_orchestrator.config.settings import Settings
from media_orchestrator.domain.content_protection import (
    ContentKeyPolicyManager,
    ContentKeyTokenService,
)
from media_orchestrator.domain.encoding import EncodingTransformManager, IMediaServicesRepository
from media_orchestrator.domain.file_storage import IContainerAccessRepository
from media_orchestrator.domain.job_monitoring import RetryClassifier
from media_orchestrator.domain.manifests import (
    IServerManifestGenerator,
    ManifestReconciler,
    SmilServerManifestGenerator,
)
from media_orchestrator.domain.streaming import (
    IManifestDownloader,
    IStreamingRepository,
    StreamingUriResolver,
)
from media_orchestrator.infrastructure.http_manifest_downloader import HttpManifestDownloader
from media_orchestrator.infrastructure.rest_media_services_repository import (
    RestMediaServicesRepository,
    UnconfiguredStreamingRepository,
)

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> Flask:
    """
    Build the application from `config` (the environment when omitted).

    Infrastructure or service wiring failures are logged and leave
    app.celery or app.container set to None; the app still starts and
    reports the problem through /health and 503 responses.
    """
    if config is None:
        config = Settings()

    configure_logging(config.log_level)

    app = Flask(__name__)
    app.settings = config

    CORS(
        app,
        resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "PUT", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization", "aeg-event-type"],
                "max_age": 3600,
            }
        },
    )

    _initialize_infrastructure(app)
    _initialize_services(app, config)
    _register_blueprints(app, config)
    _register_health_endpoint(app)

    return app


def _initialize_infrastructure(app: Flask) -> None:
    """Connect the Redis health check and build Celery; app.celery is None on failure."""
    try:
        init_redis()
        app.celery = make_celery(app)
        logger.info("Redis and Celery initialized")
    except Exception as e:
        logger.warning(f"Redis/Celery unavailable, background tasks disabled: {e}")
        app.celery = None


def _create_media_services_repository(config: Settings) -> Optional[RestMediaServicesRepository]:
    if not config.is_media_services_configured():
        logger.info("Media service management API not configured")
        return None

    return RestMediaServicesRepository.with_access_token(
        config.media_services_access_token,
        subscription_id=config.media_services_subscription_id,
        resource_group=config.media_services_resource_group,
        account_name=config.media_services_account_name,
        arm_endpoint=config.media_services_arm_endpoint,
        api_version=config.media_services_api_version,
    )


def _token_signing_key(config: Settings) -> Optional[bytes]:
    try:
        return config.get_token_signing_key()
    except ValueError as e:
        logger.warning(f"Token issuance disabled: {e}")
        return None


def _initialize_services(app: Flask, config: Settings) -> None:
    """
    Wire adapters, domain services and application services into a
    DependencyContainer on app.container.

    Without management API settings the streaming lookups fall back to
    UnconfiguredStreamingRepository and the policy and transform managers
    are left out.
    """
    try:
        container = DependencyContainer()

        # Infrastructure adapters
        container_access = container.get_container_access_repository()
        container.register_singleton(IContainerAccessRepository, container_access)

        manifest_downloader = HttpManifestDownloader(timeout=config.manifest_fetch_timeout)
        container.register_singleton(IManifestDownloader, manifest_downloader)

        media_services_repo = _create_media_services_repository(config)
        streaming_repo = media_services_repo or UnconfiguredStreamingRepository()
        container.register_singleton(IStreamingRepository, streaming_repo)
        if media_services_repo is not None:
            container.register_singleton(IMediaServicesRepository, media_services_repo)

        # Domain services
        retry_classifier = RetryClassifier()
        uri_resolver = StreamingUriResolver(streaming_repo, manifest_downloader)
        manifest_generator = SmilServerManifestGenerator()
        reconciler = ManifestReconciler(manifest_generator, uri_resolver)
        token_service = ContentKeyTokenService()

        container.register_singleton(RetryClassifier, retry_classifier)
        container.register_singleton(StreamingUriResolver, uri_resolver)
        container.register_singleton(IServerManifestGenerator, manifest_generator)
        container.register_singleton(ManifestReconciler, reconciler)
        container.register_singleton(ContentKeyTokenService, token_service)

        policy_manager = None
        transform_manager = None
        if media_services_repo is not None:
            policy_manager = ContentKeyPolicyManager(media_services_repo)
            transform_manager = EncodingTransformManager(media_services_repo)
            container.register_singleton(ContentKeyPolicyManager, policy_manager)
            container.register_singleton(EncodingTransformManager, transform_manager)

        # Application services
        manifest_service = ManifestService(
            container_access,
            reconciler,
            grant_ttl_minutes=config.container_grant_ttl_minutes,
        )
        container.register_singleton(ManifestService, manifest_service)

        container.register_singleton(JobMonitorService, JobMonitorService(retry_classifier))

        content_protection_service = ContentProtectionService(
            token_service,
            issuer=config.token_issuer,
            audience=config.token_audience,
            signing_key=_token_signing_key(config),
            policy_manager=policy_manager,
            transform_manager=transform_manager,
        )
        container.register_singleton(ContentProtectionService, content_protection_service)

        app.container = container
        logger.info("Application services initialized successfully with DependencyContainer")

    except Exception as e:
        logger.warning(f"Could not initialize services: {e}", exc_info=True)
        app.container = None


def _register_blueprints(app: Flask, config: Settings) -> None:
    from media_orchestrator.api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Redis and Celery availability decide ok (200) or degraded (503); the
    management API is reported but never degrades the status.
    """
    try:
        redis_state = "connected" if redis_health_check() else "disconnected"
    except Exception as e:
        redis_state = f"error: {e}"

    celery_state = "available" if getattr(app, "celery", None) is not None else "unavailable"

    container = getattr(app, "container", None)
    media_services_configured = container is not None and container.is_registered(
        IMediaServicesRepository
    )

    healthy = redis_state == "connected" and celery_state == "available"
    status = {
        "status": "ok" if healthy else "degraded",
        "message": "media orchestrator ready" if healthy else "media orchestrator degraded",
        "redis": redis_state,
        "celery": celery_state,
        "media_services": "configured" if media_services_configured else "not_configured",
    }
    return status, 200 if healthy else 503


def _register_health_endpoint(app: Flask) -> None:

    @app.route("/health", methods=["GET"])
    def health():
        """Broker, worker and management API status."""
        status, status_code = _get_health_status(app)
        return jsonify(status), status_code
