"""
Content Protection Value Objects

Content key policy options and the token restriction that gates key delivery.
"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

CONTENT_KEY_IDENTIFIER_CLAIM = "urn:microsoft:azure:mediaservices:contentkeyidentifier"


class TokenType(Enum):
    """Token format accepted by a token restriction."""
    JWT = "Jwt"
    SWT = "Swt"


class KeyConfiguration(Enum):
    """Key delivery configuration of a policy option."""
    CLEAR_KEY = "ClearKey"

    def odata_type(self) -> str:
        return f"#Microsoft.Media.ContentKeyPolicy{self.value}Configuration"


@dataclass(frozen=True)
class ContentKeyPolicyTokenClaim:
    """Claim a key delivery token must carry."""
    claim_type: str
    claim_value: Optional[str] = None

    @classmethod
    def content_key_identifier(cls) -> "ContentKeyPolicyTokenClaim":
        """Claim binding the token to one content key."""
        return cls(claim_type=CONTENT_KEY_IDENTIFIER_CLAIM)

    def to_dict(self) -> dict:
        data = {"claimType": self.claim_type}
        if self.claim_value is not None:
            data["claimValue"] = self.claim_value
        return data


@dataclass(frozen=True)
class TokenRestriction:
    """
    Token restriction of a content key policy option.

    Keys are symmetric; alternate_keys holds additional verification keys
    used during key rotation.
    """
    issuer: str
    audience: str
    primary_key: bytes
    token_type: TokenType = TokenType.JWT
    alternate_keys: Tuple[bytes, ...] = field(default_factory=tuple)
    required_claims: Tuple[ContentKeyPolicyTokenClaim, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.issuer:
            raise ValueError("Token issuer is required")
        if not self.audience:
            raise ValueError("Token audience is required")
        if not self.primary_key:
            raise ValueError("Token signing key is required")

    def to_dict(self) -> dict:
        return {
            "@odata.type": "#Microsoft.Media.ContentKeyPolicyTokenRestriction",
            "issuer": self.issuer,
            "audience": self.audience,
            "primaryVerificationKey": _symmetric_key(self.primary_key),
            "alternateVerificationKeys": [_symmetric_key(k) for k in self.alternate_keys],
            "requiredClaims": [claim.to_dict() for claim in self.required_claims],
            "restrictionTokenType": self.token_type.value,
        }


def _symmetric_key(key: bytes) -> dict:
    return {
        "@odata.type": "#Microsoft.Media.ContentKeyPolicySymmetricTokenKey",
        "keyValue": base64.b64encode(key).decode("ascii"),
    }


@dataclass(frozen=True)
class ContentKeyPolicyOption:
    """One way a content key can be delivered: a configuration plus a restriction."""
    configuration: KeyConfiguration
    restriction: TokenRestriction
    name: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "configuration": {"@odata.type": self.configuration.odata_type()},
            "restriction": self.restriction.to_dict(),
        }
        if self.name:
            data["name"] = self.name
        return data


@dataclass(frozen=True)
class ContentKeyPolicy:
    """Content key policy as stored by the media service."""
    name: str
    policy_id: Optional[str] = None
    description: Optional[str] = None
    option_names: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "ContentKeyPolicy":
        props = data.get("properties") or {}
        options: List[dict] = props.get("options") or []
        return cls(
            name=data.get("name", ""),
            policy_id=props.get("policyId"),
            description=props.get("description"),
            option_names=tuple(o.get("name") for o in options if o.get("name")),
        )
