"""
Media Services REST Repository

IMediaServicesRepository and IStreamingRepository over the media account's
management REST API. Authentication is the caller's concern: the session
must already carry a bearer token.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from media_orchestrator.domain.content_protection import (
    ContentKeyPolicy,
    ContentKeyPolicyOption,
)
from media_orchestrator.domain.encoding import (
    Asset,
    IMediaServicesRepository,
    Transform,
    TransformOutput,
)
from media_orchestrator.domain.errors import MediaServicesError
from media_orchestrator.domain.streaming import (
    IStreamingRepository,
    StreamingEndpoint,
    StreamingLocator,
    StreamingPath,
)

logger = logging.getLogger(__name__)

DEFAULT_ARM_ENDPOINT = "https://management.azure.com"
DEFAULT_API_VERSION = "2023-01-01"


class RestMediaServicesRepository(IMediaServicesRepository, IStreamingRepository):
    """
    Management API client for one media account.

    Attributes:
        session: Pre-authenticated requests session
        account_url: Resource URL of the media account
    """

    def __init__(
        self,
        session: requests.Session,
        subscription_id: str,
        resource_group: str,
        account_name: str,
        arm_endpoint: str = DEFAULT_ARM_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30,
    ):
        if not (subscription_id and resource_group and account_name):
            raise ValueError("subscription_id, resource_group and account_name are required")

        self.session = session
        self.api_version = api_version
        self.timeout = timeout
        self.account_url = (
            f"{arm_endpoint.rstrip('/')}/subscriptions/{quote(subscription_id)}"
            f"/resourceGroups/{quote(resource_group)}"
            f"/providers/Microsoft.Media/mediaServices/{quote(account_name)}"
        )

    @classmethod
    def with_access_token(cls, access_token: str, **kwargs) -> "RestMediaServicesRepository":
        """Build a repository whose session sends the given bearer token."""
        session = requests.Session()
        session.headers.update({"Authorization": f"Bearer {access_token}"})
        return cls(session, **kwargs)

    def _url(self, *segments: str) -> str:
        return "/".join([self.account_url] + [quote(s, safe="") for s in segments])

    def _request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
        with_api_version: bool = True,
    ) -> Optional[Dict[str, Any]]:
        params = {"api-version": self.api_version} if with_api_version else None
        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise MediaServicesError(
                f"{method} {url} failed: {e}", original_error=e
            ) from e

        if allow_not_found and response.status_code == 404:
            return None

        if not 200 <= response.status_code < 300:
            raise MediaServicesError(
                f"{method} {url} returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise MediaServicesError(
                f"{method} {url} returned invalid JSON", original_error=e
            ) from e

    # IStreamingRepository

    def list_streaming_locators(self, asset_name: str) -> List[StreamingLocator]:
        body = self._request("POST", self._url("assets", asset_name, "listStreamingLocators"))
        return [StreamingLocator.from_dict(item) for item in body.get("streamingLocators") or []]

    def list_streaming_endpoints(self) -> List[StreamingEndpoint]:
        endpoints = []
        body = self._request("GET", self._url("streamingEndpoints"))
        while True:
            endpoints.extend(StreamingEndpoint.from_dict(item) for item in body.get("value") or [])
            next_link = body.get("@odata.nextLink")
            if not next_link:
                break
            # nextLink already carries the api-version
            body = self._request("GET", next_link, with_api_version=False)
        return endpoints

    def list_streaming_paths(self, locator_name: str) -> List[StreamingPath]:
        body = self._request("POST", self._url("streamingLocators", locator_name, "listPaths"))
        return [StreamingPath.from_dict(item) for item in body.get("streamingPaths") or []]

    # IMediaServicesRepository

    def create_or_update_transform(
        self, transform_name: str, outputs: List[TransformOutput]
    ) -> Transform:
        logger.info(f"Creating or updating transform {transform_name}")
        body = self._request(
            "PUT",
            self._url("transforms", transform_name),
            json={"properties": {"outputs": [output.to_dict() for output in outputs]}},
        )
        return Transform.from_dict(body)

    def create_or_update_content_key_policy(
        self, policy_name: str, options: List[ContentKeyPolicyOption]
    ) -> ContentKeyPolicy:
        logger.info(f"Creating or updating content key policy {policy_name}")
        body = self._request(
            "PUT",
            self._url("contentKeyPolicies", policy_name),
            json={"properties": {"options": [option.to_dict() for option in options]}},
        )
        return ContentKeyPolicy.from_dict(body)

    def get_asset(self, asset_name: str) -> Optional[Asset]:
        body = self._request("GET", self._url("assets", asset_name), allow_not_found=True)
        return Asset.from_dict(body) if body is not None else None


class UnconfiguredStreamingRepository(IStreamingRepository):
    """
    Stand-in used when the management API is not configured.

    Lists nothing, so client manifest lookups resolve to "no streaming
    locator" instead of failing on a missing client.
    """

    def list_streaming_locators(self, asset_name: str) -> List[StreamingLocator]:
        logger.debug(f"Management API not configured; no locators for {asset_name}")
        return []

    def list_streaming_endpoints(self) -> List[StreamingEndpoint]:
        return []

    def list_streaming_paths(self, locator_name: str) -> List[StreamingPath]:
        return []
