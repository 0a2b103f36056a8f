"""
Application Settings

Environment-driven configuration shared by the API, the Celery worker and
the infrastructure adapters.
"""

import base64
import binascii
import os
from typing import Optional


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application configuration read from the environment at construction time."""

    def __init__(self):
        # API
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.flask_host = os.getenv("FLASK_HOST", "0.0.0.0")
        self.flask_port = int(os.getenv("FLASK_PORT", 8000))
        self.flask_debug = _env_bool("FLASK_DEBUG")
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        # Storage
        self.gcs_bucket_name = os.getenv("GCS_BUCKET_NAME")
        self.asset_storage_dir = os.getenv("ASSET_STORAGE_DIR", "/tmp/media-orchestrator")
        self.container_grant_ttl_minutes = int(os.getenv("CONTAINER_SAS_TTL_MINUTES", 5))

        # Streaming endpoints
        self.manifest_fetch_timeout = float(os.getenv("MANIFEST_FETCH_TIMEOUT", 30))

        # Key delivery tokens
        self.token_issuer = os.getenv("TOKEN_ISSUER")
        self.token_audience = os.getenv("TOKEN_AUDIENCE")
        self.token_signing_key = os.getenv("TOKEN_SIGNING_KEY")

        # Media service management API
        self.media_services_subscription_id = os.getenv("MEDIA_SERVICES_SUBSCRIPTION_ID")
        self.media_services_resource_group = os.getenv("MEDIA_SERVICES_RESOURCE_GROUP")
        self.media_services_account_name = os.getenv("MEDIA_SERVICES_ACCOUNT_NAME")
        self.media_services_access_token = os.getenv("MEDIA_SERVICES_ACCESS_TOKEN")
        self.media_services_arm_endpoint = os.getenv(
            "MEDIA_SERVICES_ARM_ENDPOINT", "https://management.azure.com"
        )
        self.media_services_api_version = os.getenv("MEDIA_SERVICES_API_VERSION", "2023-01-01")

    def get_token_signing_key(self) -> Optional[bytes]:
        """
        Decode TOKEN_SIGNING_KEY (base64).

        Raises:
            ValueError: If the key is set but is not valid base64
        """
        if not self.token_signing_key:
            return None
        try:
            return base64.b64decode(self.token_signing_key, validate=True)
        except binascii.Error as e:
            raise ValueError("TOKEN_SIGNING_KEY must be base64 encoded") from e

    def is_media_services_configured(self) -> bool:
        return all(
            (
                self.media_services_subscription_id,
                self.media_services_resource_group,
                self.media_services_account_name,
                self.media_services_access_token,
            )
        )
