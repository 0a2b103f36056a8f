"""
Unit tests for error categories, error responses and container access grants.
"""

from datetime import datetime, timedelta, timezone

import pytest

from media_orchestrator.domain.errors import (
    ERROR_MESSAGES,
    ApplicationError,
    ClientManifestNotFoundError,
    DomainError,
    ErrorCategory,
    MediaServicesError,
    create_error_response,
)
from media_orchestrator.domain.file_storage import ContainerAccessGrant, ContainerPermission


class TestErrorCategories:

    def test_every_category_has_user_message(self):
        for category in ErrorCategory:
            assert set(ERROR_MESSAGES[category]) == {"title", "message", "action"}

    def test_application_error_to_dict(self):
        error = ApplicationError(ErrorCategory.STORAGE_UNAVAILABLE, "grant failed")

        data = error.to_dict()

        assert data["error"] == "storage_unavailable"
        assert data["title"] == "Storage Unavailable"
        assert error.technical_message == "grant failed"
        assert "grant failed" not in data.values()

    def test_create_error_response(self):
        body, status = create_error_response(ErrorCategory.INVALID_REQUEST, status_code=400)

        assert status == 400
        assert body["error"] == "invalid_request"

    def test_domain_error_keeps_original(self):
        cause = IOError("boom")
        error = ClientManifestNotFoundError("no manifest", original_error=cause)

        assert isinstance(error, DomainError)
        assert error.original_error is cause

    def test_media_services_error_status(self):
        assert MediaServicesError("conflict", status_code=409).status_code == 409


class TestContainerAccessGrant:

    def test_requires_timezone_aware_expiry(self):
        with pytest.raises(ValueError):
            ContainerAccessGrant("memory://a", ContainerPermission.READ, datetime(2030, 1, 1))

    def test_requires_container_url(self):
        with pytest.raises(ValueError):
            ContainerAccessGrant(
                "", ContainerPermission.READ, datetime.now(timezone.utc) + timedelta(minutes=5)
            )

    def test_expiry(self):
        live = ContainerAccessGrant(
            "memory://a", ContainerPermission.READ, datetime.now(timezone.utc) + timedelta(minutes=5)
        )
        expired = ContainerAccessGrant(
            "memory://a", ContainerPermission.READ, datetime.now(timezone.utc) - timedelta(seconds=1)
        )

        assert not live.is_expired()
        assert 0 < live.get_remaining_seconds() <= 300
        assert expired.is_expired()
        assert expired.get_remaining_seconds() == 0

    def test_write_permissions(self):
        assert not ContainerPermission.READ.allows_write()
        assert ContainerPermission.READ_WRITE.allows_write()
        assert ContainerPermission.READ_WRITE_DELETE.allows_write()

    def test_to_dict(self):
        grant = ContainerAccessGrant(
            "memory://a", ContainerPermission.READ_WRITE, datetime.now(timezone.utc) + timedelta(minutes=1)
        )
        assert grant.to_dict()["permissions"] == "ReadWrite"
