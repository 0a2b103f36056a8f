"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields

from media_orchestrator.api.v1 import api

# =============================================================================
# Request Models
# =============================================================================

reconcile_request = api.model(
    "ReconcileRequest",
    {
        "locator_name": fields.String(
            required=False,
            description="Preferred streaming locator; defaults to the asset's first locator",
            example="locator-1",
        ),
        "async": fields.Boolean(
            required=False,
            default=False,
            description="Queue the reconciliation as a background task instead of running it inline",
        ),
    },
)

retry_evaluation_request = api.model(
    "RetryEvaluationRequest",
    {
        "asset_name": fields.String(
            required=True,
            description="Output asset name (case-insensitive)",
            example="output-asset-01",
        ),
        "job": fields.Raw(
            required=True,
            description="Job object as returned by the media service",
        ),
    },
)

token_request = api.model(
    "TokenRequest",
    {
        "key_identifier": fields.String(
            required=True,
            description="Content key identifier the token is bound to",
            example="a7f2c1de-6a77-4b0b-9e86-3c1c3f7b5a10",
        )
    },
)

transform_request = api.model(
    "TransformRequest",
    {
        "preset": fields.String(
            required=True,
            description="Built-in encoder preset name",
            example="AdaptiveStreaming",
        )
    },
)

# =============================================================================
# Response Models
# =============================================================================

reconcile_response = api.model(
    "ReconcileResponse",
    {
        "asset_name": fields.String(description="Reconciled asset"),
        "server_manifests": fields.List(
            fields.String, description="Server manifest (.ism) names in the container"
        ),
    },
)

task_response = api.model(
    "TaskResponse",
    {
        "task_id": fields.String(description="Background task identifier"),
        "asset_name": fields.String(description="Asset queued for reconciliation"),
        "status": fields.String(description="Task status", example="queued"),
    },
)

retry_evaluation_response = api.model(
    "RetryEvaluationResponse",
    {
        "job_name": fields.String(description="Job name"),
        "asset_name": fields.String(description="Output asset name"),
        "retriable": fields.Boolean(description="True if the job should be resubmitted"),
        "terminal": fields.Boolean(description="True if the output state is Canceled, Error or Finished"),
        "state": fields.String(description="Output state", allow_null=True),
        "timestamp": fields.String(description="Time the output state was reached (ISO 8601)"),
    },
)

event_result = api.model(
    "JobOutputEventResult",
    {
        "asset_name": fields.String(description="Output asset name"),
        "state": fields.String(description="Output state", allow_null=True),
        "retriable": fields.Boolean(description="True if the output failed with a transient error"),
        "terminal": fields.Boolean(description="True if the output state is Canceled, Error or Finished"),
    },
)

events_response = api.model(
    "JobOutputEventsResponse",
    {
        "results": fields.List(
            fields.Nested(event_result), description="One entry per job output event"
        ),
        "validationResponse": fields.String(
            description="Validation code, only for a subscription validation handshake"
        ),
    },
)

events_task_response = api.model(
    "JobOutputEventsTaskResponse",
    {
        "task_ids": fields.List(
            fields.String, description="One evaluation task per job output event"
        ),
        "status": fields.String(description="Task status", example="queued"),
    },
)

token_response = api.model(
    "TokenResponse",
    {"token": fields.String(description="Signed key delivery token (JWT)")},
)

content_key_policy_response = api.model(
    "ContentKeyPolicyResponse",
    {
        "name": fields.String(description="Policy name"),
        "policy_id": fields.String(description="Policy identifier", allow_null=True),
        "options": fields.List(fields.String, description="Policy option names"),
    },
)

transform_response = api.model(
    "TransformResponse",
    {
        "name": fields.String(description="Transform name"),
        "presets": fields.List(fields.String, description="Preset of each transform output"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested action"),
    },
)
