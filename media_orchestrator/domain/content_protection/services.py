"""
Content Protection Services

Domain services for content key policies and key delivery tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, TYPE_CHECKING

import jwt

from .value_objects import (
    CONTENT_KEY_IDENTIFIER_CLAIM,
    ContentKeyPolicy,
    ContentKeyPolicyOption,
    ContentKeyPolicyTokenClaim,
    KeyConfiguration,
    TokenRestriction,
    TokenType,
)

TOKEN_ALGORITHM = "HS256"
TOKEN_NOT_BEFORE_SKEW = timedelta(minutes=5)
TOKEN_LIFETIME = timedelta(minutes=60)

if TYPE_CHECKING:
    from media_orchestrator.domain.encoding.repositories import IMediaServicesRepository


class ContentKeyPolicyManager:
    """Makes sure the content key policy used by streaming locators exists."""

    def __init__(self, media_services_repository: "IMediaServicesRepository"):
        self.media_services_repo = media_services_repository

    def ensure_content_key_policy_exists(
        self,
        policy_name: str,
        token_signing_key: bytes,
        issuer: str,
        audience: str,
    ) -> ContentKeyPolicy:
        """
        Create or update a clear key policy restricted to JWT tokens.

        The single option requires tokens signed with token_signing_key that
        carry the content key identifier claim. No alternate keys are set.

        Args:
            policy_name: Content key policy name
            token_signing_key: Symmetric verification key
            issuer: Expected token issuer
            audience: Expected token audience

        Returns:
            ContentKeyPolicy as stored by the media service

        Raises:
            ValueError: If a required value is empty
            MediaServicesError: If the service rejects the request
        """
        if not policy_name:
            raise ValueError("Content key policy name is required")

        restriction = TokenRestriction(
            issuer=issuer,
            audience=audience,
            primary_key=token_signing_key,
            token_type=TokenType.JWT,
            alternate_keys=(),
            required_claims=(ContentKeyPolicyTokenClaim.content_key_identifier(),),
        )
        option = ContentKeyPolicyOption(
            configuration=KeyConfiguration.CLEAR_KEY,
            restriction=restriction,
        )
        return self.media_services_repo.create_or_update_content_key_policy(policy_name, [option])


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContentKeyTokenService:
    """
    Issues key delivery tokens.

    Tokens are compact HS256 JWTs valid from five minutes before issuance
    until sixty minutes after it.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or _utc_now

    def get_token(
        self,
        issuer: str,
        audience: str,
        key_identifier: str,
        token_verification_key: bytes,
    ) -> str:
        """
        Create a signed token for one content key.

        Args:
            issuer: Token issuer
            audience: Token audience
            key_identifier: Content key identifier placed in the required claim
            token_verification_key: Symmetric signing key

        Returns:
            Compact serialized JWT

        Raises:
            ValueError: If a required value is empty
        """
        if not key_identifier:
            raise ValueError("Key identifier is required")
        if not token_verification_key:
            raise ValueError("Token signing key is required")

        now = self.clock()
        payload = {
            "iss": issuer,
            "aud": audience,
            "nbf": now - TOKEN_NOT_BEFORE_SKEW,
            "exp": now + TOKEN_LIFETIME,
            CONTENT_KEY_IDENTIFIER_CLAIM: key_identifier,
        }
        return jwt.encode(payload, token_verification_key, algorithm=TOKEN_ALGORITHM)
