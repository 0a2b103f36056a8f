"""
Errors

Domain exceptions raised by the reconciliation, streaming and media service
ports, plus the categorized ApplicationError the API turns into responses.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ErrorCategory(Enum):
    """Failure categories reported to API clients and in task results."""

    INVALID_REQUEST = "invalid_request"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    CLIENT_MANIFEST_UNAVAILABLE = "client_manifest_unavailable"
    MANIFEST_RECONCILIATION_FAILED = "manifest_reconciliation_failed"
    MEDIA_SERVICES_ERROR = "media_services_error"
    TOKEN_CONFIGURATION_MISSING = "token_configuration_missing"
    SERVICE_NOT_CONFIGURED = "service_not_configured"
    SYSTEM_ERROR = "system_error"


# Response text per category
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.STORAGE_UNAVAILABLE: {
        "title": "Storage Unavailable",
        "message": "A short-lived access grant for the asset container could not be issued.",
        "action": "Retry the reconciliation in a few moments.",
    },
    ErrorCategory.CLIENT_MANIFEST_UNAVAILABLE: {
        "title": "Client Manifest Unavailable",
        "message": "The client manifest could not be fetched from a streaming endpoint.",
        "action": "Make sure the asset has a streaming locator and an endpoint is running, then retry.",
    },
    ErrorCategory.MANIFEST_RECONCILIATION_FAILED: {
        "title": "Manifest Reconciliation Failed",
        "message": "The server and client manifests for this asset could not be reconciled.",
        "action": "Check the asset contents and retry. The asset was left unchanged.",
    },
    ErrorCategory.MEDIA_SERVICES_ERROR: {
        "title": "Media Service Error",
        "message": "The media service rejected the request or could not be reached.",
        "action": "Retry later. If the problem persists, check the account configuration.",
    },
    ErrorCategory.TOKEN_CONFIGURATION_MISSING: {
        "title": "Token Issuance Not Configured",
        "message": "Token issuer, audience or signing key is not configured.",
        "action": "Set TOKEN_ISSUER, TOKEN_AUDIENCE and TOKEN_SIGNING_KEY.",
    },
    ErrorCategory.SERVICE_NOT_CONFIGURED: {
        "title": "Service Not Configured",
        "message": "The requested service is not configured on this instance.",
        "action": "Check the media service settings of this deployment.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# Domain exceptions

class DomainError(Exception):
    """Base of the domain exceptions; keeps the lower-level cause, if any."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class ContainerAccessError(DomainError):
    """
    Raised when a write-capable access grant for an asset container
    cannot be issued, or when an expired grant is used.
    """
    pass


class ClientManifestNotFoundError(DomainError):
    """Raised when no client manifest can be fetched for an asset."""
    pass


class EmptyClientManifestError(DomainError):
    """Raised when the fetched client manifest document is empty."""
    pass


class ManifestFormatError(DomainError):
    """Raised when a manifest is not a well-formed XML document."""
    pass


class ManifestDownloadError(DomainError):
    """Raised when a manifest cannot be downloaded from a streaming endpoint."""
    pass


class MediaServicesError(DomainError):
    """Raised when the media service management API call fails."""

    def __init__(
        self,
        message: str,
        original_error: Exception = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, original_error)
        self.status_code = status_code


# Application exceptions

class ApplicationError(Exception):
    """
    A failure with a category. The user-facing title, message and action
    come from ERROR_MESSAGES; technical_message is kept for logs only.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        info = ERROR_MESSAGES.get(category) or ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        super().__init__(info["message"])
        self.category = category
        self.technical_message = technical_message or ""
        self.context = dict(context or {})
        self.title, self.message, self.action = info["title"], info["message"], info["action"]

    def to_dict(self) -> Dict[str, Any]:
        """Response body: error, title, message and action."""
        return dict(error=self.category.value, title=self.title, message=self.message, action=self.action)


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> Tuple[Dict[str, Any], int]:
    """(body, status) pair for a flask-restx resource to return."""
    return ApplicationError(category, technical_message, context).to_dict(), status_code
