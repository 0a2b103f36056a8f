"""
Content Protection Domain

Content key policies and key delivery tokens.
"""

from .value_objects import (
    CONTENT_KEY_IDENTIFIER_CLAIM,
    ContentKeyPolicy,
    ContentKeyPolicyOption,
    ContentKeyPolicyTokenClaim,
    KeyConfiguration,
    TokenRestriction,
    TokenType,
)
from .services import ContentKeyPolicyManager, ContentKeyTokenService

__all__ = [
    'CONTENT_KEY_IDENTIFIER_CLAIM',
    'ContentKeyPolicy',
    'ContentKeyPolicyManager',
    'ContentKeyPolicyOption',
    'ContentKeyPolicyTokenClaim',
    'ContentKeyTokenService',
    'KeyConfiguration',
    'TokenRestriction',
    'TokenType',
]
