"""
API Namespaces - Organized endpoint groups
"""

from flask import current_app, request
from flask_restx import Namespace, Resource

from media_orchestrator.api.v1.models import (
    content_key_policy_response,
    error_response,
    events_response,
    events_task_response,
    reconcile_request,
    reconcile_response,
    retry_evaluation_request,
    retry_evaluation_response,
    task_response,
    token_request,
    token_response,
    transform_request,
    transform_response,
)
from media_orchestrator.application import (
    ContentProtectionService,
    JobMonitorService,
    ManifestService,
)
from media_orchestrator.domain.errors import (
    ApplicationError,
    ErrorCategory,
    MediaServicesError,
    create_error_response,
)

# HTTP status for each per-asset reconciliation failure category
_RECONCILIATION_STATUS = {
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.STORAGE_UNAVAILABLE: 503,
    ErrorCategory.SYSTEM_ERROR: 500,
}

RECONCILE_TASK = "media_orchestrator.tasks.reconcile_manifests"
JOB_OUTPUT_EVENT_TASK = "media_orchestrator.tasks.evaluate_job_output_event"

_APPLICATION_ERROR_STATUS = {
    ErrorCategory.TOKEN_CONFIGURATION_MISSING: 503,
    ErrorCategory.SERVICE_NOT_CONFIGURED: 503,
}


def _resolve(service_type):
    """Resolve a service from the app container, or None when unavailable."""
    container = getattr(current_app, "container", None)
    if container is None or not container.is_registered(service_type):
        return None
    return container.resolve(service_type)


def _service_unavailable(name: str):
    return create_error_response(
        ErrorCategory.SYSTEM_ERROR,
        f"{name} not initialized",
        status_code=503
    )


def _send_tasks(task_name: str, args_list):
    """
    Enqueue one Celery task per argument tuple.

    Returns:
        (task_ids, None) on success, (None, error_response) when Celery is
        unavailable (503) or the broker rejects a task (500)
    """
    celery = getattr(current_app, "celery", None)
    if celery is None:
        return None, create_error_response(
            ErrorCategory.SYSTEM_ERROR,
            "Background task system not available",
            status_code=503
        )

    task_ids = []
    try:
        for args in args_list:
            task_ids.append(celery.send_task(task_name, args=args).id)
    except Exception as e:
        current_app.logger.exception(f"Failed to enqueue {task_name}: {e}")
        return None, create_error_response(
            ErrorCategory.SYSTEM_ERROR,
            "Failed to enqueue background task",
            status_code=500
        )
    return task_ids, None


# =============================================================================
# Manifest Namespace - Manifest reconciliation
# =============================================================================

manifest_ns = Namespace("manifests", description="Streaming manifest operations")


@manifest_ns.route("/<string:asset_name>")
@manifest_ns.param("asset_name", "The asset whose container is reconciled")
class ManifestReconciliation(Resource):
    """Reconcile server and client manifests of an asset"""

    @manifest_ns.doc("reconcile_manifests")
    @manifest_ns.expect(reconcile_request)
    @manifest_ns.response(200, "Success", reconcile_response)
    @manifest_ns.response(202, "Queued", task_response)
    @manifest_ns.response(400, "Bad Request", error_response)
    @manifest_ns.response(502, "Reconciliation Failed", error_response)
    @manifest_ns.response(503, "Service Unavailable", error_response)
    def post(self, asset_name):
        """
        Reconcile the manifests of an asset

        Uploads a generated server manifest (.ism) and, when the container has
        no client manifest (.ismc), fetches one from a streaming endpoint,
        strips its DRM header and links it from the server manifest.
        """
        data = request.get_json(silent=True) or {}
        locator_name = (data.get("locator_name") or "").strip() or None

        if data.get("async"):
            task_ids, error = _send_tasks(RECONCILE_TASK, [(asset_name, locator_name)])
            if error is not None:
                return error
            current_app.logger.info(f"[API_V1] Enqueued reconciliation for asset {asset_name}")
            return {"task_id": task_ids[0], "asset_name": asset_name, "status": "queued"}, 202

        manifest_service = _resolve(ManifestService)
        if manifest_service is None:
            return _service_unavailable("Manifest service")

        result = manifest_service.reconcile_asset_manifests(asset_name, locator_name)
        if not result.success:
            return create_error_response(
                result.error_type,
                result.error_message,
                status_code=_RECONCILIATION_STATUS.get(result.error_type, 502)
            )

        return {
            "asset_name": result.asset_name,
            "server_manifests": result.server_manifests,
        }, 200


# =============================================================================
# Job Namespace - Retry evaluation
# =============================================================================

job_ns = Namespace("jobs", description="Encoding job status evaluation")


@job_ns.route("/retry-evaluation")
class JobRetryEvaluation(Resource):
    """Evaluate a polled job"""

    @job_ns.doc("evaluate_job_retry")
    @job_ns.expect(retry_evaluation_request, validate=True)
    @job_ns.response(200, "Success", retry_evaluation_response)
    @job_ns.response(400, "Bad Request", error_response)
    def post(self):
        """
        Decide whether a failed job should be resubmitted

        Returns the retry decision and the output state with the time it
        was reached. The job itself is not resubmitted.
        """
        data = request.get_json()
        asset_name = (data.get("asset_name") or "").strip()
        job_data = data.get("job")

        if not asset_name:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'asset_name' in request body",
                status_code=400
            )

        job_monitor = _resolve(JobMonitorService)
        if job_monitor is None:
            return _service_unavailable("Job monitor service")

        try:
            return job_monitor.evaluate_job(job_data, asset_name), 200
        except ValueError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                str(e),
                status_code=400
            )


@job_ns.route("/events")
class JobOutputEvents(Resource):
    """Receive job output state-change events"""

    @job_ns.doc(
        "handle_job_output_events",
        params={"async": "Queue one evaluation task per job output event instead of answering inline"},
    )
    @job_ns.response(200, "Success", events_response)
    @job_ns.response(202, "Queued", events_task_response)
    @job_ns.response(400, "Bad Request", error_response)
    @job_ns.response(503, "Service Unavailable", error_response)
    def post(self):
        """
        Evaluate job output state-change events

        Accepts a single event or a batch. A subscription validation event
        is answered with its validation code, also when queuing.
        """
        payload = request.get_json(silent=True)
        if payload is None:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Request body must be JSON",
                status_code=400
            )

        job_monitor = _resolve(JobMonitorService)
        if job_monitor is None:
            return _service_unavailable("Job monitor service")

        try:
            if request.args.get("async", "").lower() not in ("1", "true", "yes"):
                return job_monitor.handle_events(payload), 200

            validation = job_monitor.validation_response(payload)
            if validation is not None:
                return validation, 200
            events = job_monitor.job_output_events(payload)
        except ValueError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                str(e),
                status_code=400
            )

        task_ids, error = _send_tasks(JOB_OUTPUT_EVENT_TASK, [(event,) for event in events])
        if error is not None:
            return error
        current_app.logger.info(f"[API_V1] Enqueued {len(task_ids)} job output event evaluations")
        return {"task_ids": task_ids, "status": "queued"}, 202


# =============================================================================
# Content Protection Namespace - Key delivery
# =============================================================================

content_protection_ns = Namespace(
    "content-protection", description="Content key policies and key delivery tokens"
)


@content_protection_ns.route("/tokens")
class KeyDeliveryToken(Resource):
    """Issue key delivery tokens"""

    @content_protection_ns.doc("issue_token")
    @content_protection_ns.expect(token_request, validate=True)
    @content_protection_ns.response(200, "Success", token_response)
    @content_protection_ns.response(400, "Bad Request", error_response)
    @content_protection_ns.response(503, "Not Configured", error_response)
    def post(self):
        """
        Issue a signed token for one content key

        The token is valid from five minutes ago until sixty minutes from now.
        """
        data = request.get_json()
        key_identifier = (data.get("key_identifier") or "").strip()
        if not key_identifier:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'key_identifier' in request body",
                status_code=400
            )

        service = _resolve(ContentProtectionService)
        if service is None:
            return _service_unavailable("Content protection service")

        try:
            return {"token": service.issue_token(key_identifier)}, 200
        except ApplicationError as e:
            return create_error_response(
                e.category,
                e.technical_message,
                status_code=_APPLICATION_ERROR_STATUS.get(e.category, 400)
            )


@content_protection_ns.route("/policies/<string:policy_name>")
@content_protection_ns.param("policy_name", "The content key policy name")
class ContentKeyPolicyResource(Resource):
    """Content key policy setup"""

    @content_protection_ns.doc("ensure_content_key_policy")
    @content_protection_ns.response(200, "Success", content_key_policy_response)
    @content_protection_ns.response(502, "Media Service Error", error_response)
    @content_protection_ns.response(503, "Not Configured", error_response)
    def put(self, policy_name):
        """
        Create or update a clear key policy gated by this deployment's tokens
        """
        service = _resolve(ContentProtectionService)
        if service is None:
            return _service_unavailable("Content protection service")

        try:
            return service.ensure_content_key_policy(policy_name), 200
        except ApplicationError as e:
            return create_error_response(
                e.category,
                e.technical_message,
                status_code=_APPLICATION_ERROR_STATUS.get(e.category, 400)
            )
        except MediaServicesError as e:
            current_app.logger.warning(f"Content key policy {policy_name} failed: {e}")
            return create_error_response(
                ErrorCategory.MEDIA_SERVICES_ERROR,
                str(e),
                status_code=502
            )


# =============================================================================
# Transform Namespace - Encoding transforms
# =============================================================================

transform_ns = Namespace("transforms", description="Encoding transform setup")


@transform_ns.route("/<string:transform_name>")
@transform_ns.param("transform_name", "The transform name")
class TransformResource(Resource):
    """Encoding transform setup"""

    @transform_ns.doc("ensure_transform")
    @transform_ns.expect(transform_request, validate=True)
    @transform_ns.response(200, "Success", transform_response)
    @transform_ns.response(400, "Bad Request", error_response)
    @transform_ns.response(502, "Media Service Error", error_response)
    @transform_ns.response(503, "Not Configured", error_response)
    def put(self, transform_name):
        """
        Create or update a transform with one output for a built-in preset
        """
        data = request.get_json()
        preset = (data.get("preset") or "").strip()

        service = _resolve(ContentProtectionService)
        if service is None:
            return _service_unavailable("Content protection service")

        try:
            return service.ensure_transform(transform_name, preset), 200
        except ValueError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                str(e),
                status_code=400
            )
        except ApplicationError as e:
            return create_error_response(
                e.category,
                e.technical_message,
                status_code=_APPLICATION_ERROR_STATUS.get(e.category, 400)
            )
        except MediaServicesError as e:
            current_app.logger.warning(f"Transform {transform_name} failed: {e}")
            return create_error_response(
                ErrorCategory.MEDIA_SERVICES_ERROR,
                str(e),
                status_code=502
            )
