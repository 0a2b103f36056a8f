"""
Content Protection Application Service

Coordinates key delivery token issuance and media account setup
(content key policies and encoding transforms).
"""

import logging
from typing import Any, Dict, Optional

from media_orchestrator.domain.content_protection import (
    ContentKeyPolicyManager,
    ContentKeyTokenService,
)
from media_orchestrator.domain.encoding import EncodingTransformManager
from media_orchestrator.domain.errors import ApplicationError, ErrorCategory

logger = logging.getLogger(__name__)


class ContentProtectionService:
    """
    Application service for content protection use cases.

    Token issuer, audience and signing key come from deployment settings.
    The policy and transform managers are optional: they need the media
    service management API, which may not be configured.
    """

    def __init__(
        self,
        token_service: ContentKeyTokenService,
        issuer: Optional[str],
        audience: Optional[str],
        signing_key: Optional[bytes],
        policy_manager: Optional[ContentKeyPolicyManager] = None,
        transform_manager: Optional[EncodingTransformManager] = None,
    ):
        self.token_service = token_service
        self.issuer = issuer
        self.audience = audience
        self.signing_key = signing_key
        self.policy_manager = policy_manager
        self.transform_manager = transform_manager

    def is_token_issuance_configured(self) -> bool:
        return bool(self.issuer and self.audience and self.signing_key)

    def issue_token(self, key_identifier: str) -> str:
        """
        Issue a key delivery token for one content key.

        Raises:
            ApplicationError: If token settings are missing
            ValueError: If key_identifier is empty
        """
        if not self.is_token_issuance_configured():
            raise ApplicationError(
                ErrorCategory.TOKEN_CONFIGURATION_MISSING,
                "TOKEN_ISSUER, TOKEN_AUDIENCE or TOKEN_SIGNING_KEY is not set",
            )

        token = self.token_service.get_token(
            self.issuer, self.audience, key_identifier, self.signing_key
        )
        logger.info(f"Issued key delivery token for key {key_identifier}")
        return token

    def ensure_content_key_policy(self, policy_name: str) -> Dict[str, Any]:
        """
        Create or update the clear key policy gated by this deployment's tokens.

        Raises:
            ApplicationError: If the management API or token settings are missing
            ValueError: If policy_name is empty
            MediaServicesError: If the service rejects the request
        """
        if self.policy_manager is None:
            raise ApplicationError(
                ErrorCategory.SERVICE_NOT_CONFIGURED,
                "Media service management API is not configured",
            )
        if not self.is_token_issuance_configured():
            raise ApplicationError(
                ErrorCategory.TOKEN_CONFIGURATION_MISSING,
                "TOKEN_ISSUER, TOKEN_AUDIENCE or TOKEN_SIGNING_KEY is not set",
            )

        logger.info(f"Ensuring content key policy {policy_name}")
        policy = self.policy_manager.ensure_content_key_policy_exists(
            policy_name, self.signing_key, self.issuer, self.audience
        )
        return {
            "name": policy.name,
            "policy_id": policy.policy_id,
            "options": list(policy.option_names),
        }

    def ensure_transform(self, transform_name: str, preset: str) -> Dict[str, Any]:
        """
        Create or update an encoding transform from a built-in preset.

        Raises:
            ApplicationError: If the management API is not configured
            ValueError: If the name or preset is empty
            MediaServicesError: If the service rejects the request
        """
        if self.transform_manager is None:
            raise ApplicationError(
                ErrorCategory.SERVICE_NOT_CONFIGURED,
                "Media service management API is not configured",
            )

        logger.info(f"Ensuring transform {transform_name} with preset {preset}")
        transform = self.transform_manager.ensure_transform_exists(transform_name, preset)
        return {
            "name": transform.name,
            "presets": [output.preset for output in transform.outputs],
        }
