"""
Unit tests for ContentProtectionService.
"""

import jwt
import pytest

from media_orchestrator.application import ContentProtectionService
from media_orchestrator.domain.content_protection import (
    ContentKeyPolicyManager,
    ContentKeyTokenService,
)
from media_orchestrator.domain.encoding import EncodingTransformManager
from media_orchestrator.domain.errors import ApplicationError, ErrorCategory
from tests.fixtures import MockMediaServicesRepository

SIGNING_KEY = b"0123456789abcdef0123456789abcdef"


@pytest.fixture
def media_repo():
    return MockMediaServicesRepository()


@pytest.fixture
def service(media_repo):
    return ContentProtectionService(
        ContentKeyTokenService(),
        issuer="https://issuer.example",
        audience="urn:media-orchestrator",
        signing_key=SIGNING_KEY,
        policy_manager=ContentKeyPolicyManager(media_repo),
        transform_manager=EncodingTransformManager(media_repo),
    )


@pytest.fixture
def unconfigured_service():
    return ContentProtectionService(
        ContentKeyTokenService(), issuer=None, audience=None, signing_key=None
    )


class TestIssueToken:

    def test_issues_verifiable_token(self, service):
        token = service.issue_token("key-1")

        claims = jwt.decode(
            token,
            SIGNING_KEY,
            algorithms=["HS256"],
            audience="urn:media-orchestrator",
            issuer="https://issuer.example",
        )
        assert "key-1" in claims.values()

    def test_missing_configuration(self, unconfigured_service):
        with pytest.raises(ApplicationError) as exc_info:
            unconfigured_service.issue_token("key-1")

        assert exc_info.value.category == ErrorCategory.TOKEN_CONFIGURATION_MISSING

    def test_empty_key_identifier(self, service):
        with pytest.raises(ValueError):
            service.issue_token("")


class TestEnsureContentKeyPolicy:

    def test_creates_policy(self, service, media_repo):
        result = service.ensure_content_key_policy("policy-1")

        assert result["name"] == "policy-1"
        assert "policy-1" in media_repo.content_key_policies

    def test_management_api_not_configured(self, unconfigured_service):
        with pytest.raises(ApplicationError) as exc_info:
            unconfigured_service.ensure_content_key_policy("policy-1")

        assert exc_info.value.category == ErrorCategory.SERVICE_NOT_CONFIGURED

    def test_token_settings_required(self, media_repo):
        service = ContentProtectionService(
            ContentKeyTokenService(),
            issuer=None,
            audience=None,
            signing_key=None,
            policy_manager=ContentKeyPolicyManager(media_repo),
        )

        with pytest.raises(ApplicationError) as exc_info:
            service.ensure_content_key_policy("policy-1")

        assert exc_info.value.category == ErrorCategory.TOKEN_CONFIGURATION_MISSING
        assert media_repo.get_call_history() == []


class TestEnsureTransform:

    def test_creates_transform(self, service):
        result = service.ensure_transform("adaptive", "AdaptiveStreaming")

        assert result == {"name": "adaptive", "presets": ["AdaptiveStreaming"]}

    def test_management_api_not_configured(self, unconfigured_service):
        with pytest.raises(ApplicationError) as exc_info:
            unconfigured_service.ensure_transform("adaptive", "AdaptiveStreaming")

        assert exc_info.value.category == ErrorCategory.SERVICE_NOT_CONFIGURED
