"""
Versioned REST API: one flask-restx Api on a blueprint mounted under
/api/<API_VERSION>, Swagger UI at /api/<API_VERSION>/docs.
"""

import os

from flask import Blueprint
from flask_restx import Api

API_VERSION = os.getenv("API_VERSION", "v1")

api_v1_bp = Blueprint("api_v1", __name__, url_prefix=f"/api/{API_VERSION}")

api = Api(
    api_v1_bp,
    version="1.0",
    title="Media Orchestrator API",
    description=(
        "Manifest reconciliation, job retry evaluation, key delivery tokens "
        "and transform setup for a managed media encoding platform"
    ),
    doc="/docs",
)

# Namespaces import the models registered on `api`
from .namespaces import (  # noqa: E402
    content_protection_ns,
    job_ns,
    manifest_ns,
    transform_ns,
)

for _namespace, _path in (
    (manifest_ns, "/manifests"),
    (job_ns, "/jobs"),
    (content_protection_ns, "/content-protection"),
    (transform_ns, "/transforms"),
):
    api.add_namespace(_namespace, path=_path)
