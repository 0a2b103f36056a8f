"""
Unit tests for streaming locator/endpoint selection and StreamingUriResolver.
"""

import pytest

from media_orchestrator.domain.errors import ClientManifestNotFoundError
from media_orchestrator.domain.streaming import (
    LiveOutput,
    StreamingEndpoint,
    StreamingEndpointResourceState,
    StreamingLocator,
    StreamingPath,
    StreamingProtocol,
    StreamingUriResolver,
    select_streaming_endpoint,
    select_streaming_locator,
)
from tests.fixtures import (
    MockManifestDownloader,
    MockStreamingRepository,
    create_smooth_path,
    create_streaming_endpoint,
    create_streaming_locator,
    publish_asset,
)
from tests.fixtures.domain_fixtures import DEFAULT_HOST

LOCATOR_ID = "0f1e2d3c-4b5a-6978-8796-a5b4c3d2e1f0"


@pytest.fixture
def repo():
    return MockStreamingRepository()


@pytest.fixture
def downloader():
    return MockManifestDownloader()


@pytest.fixture
def resolver(repo, downloader):
    return StreamingUriResolver(repo, downloader)


class TestSelectStreamingEndpoint:

    def test_running_endpoint_is_preferred(self):
        stopped = create_streaming_endpoint("a", "a.example", StreamingEndpointResourceState.STOPPED)
        running = create_streaming_endpoint("b", "b.example", StreamingEndpointResourceState.RUNNING)

        assert select_streaming_endpoint([stopped, running]) is running

    def test_first_endpoint_when_none_running(self):
        first = create_streaming_endpoint("a", "a.example", StreamingEndpointResourceState.STOPPED)
        second = create_streaming_endpoint("b", "b.example", StreamingEndpointResourceState.STARTING)

        assert select_streaming_endpoint([first, second]) is first

    def test_no_endpoints(self):
        assert select_streaming_endpoint([]) is None


class TestSelectStreamingLocator:

    def test_first_locator_by_default(self):
        locators = [create_streaming_locator("l1"), create_streaming_locator("l2")]
        assert select_streaming_locator(locators).name == "l1"

    def test_named_locator(self):
        locators = [create_streaming_locator("l1"), create_streaming_locator("l2")]
        assert select_streaming_locator(locators, "l2").name == "l2"

    def test_missing_named_locator(self):
        locators = [create_streaming_locator("l1")]
        assert select_streaming_locator(locators, "nope") is None

    def test_no_locators(self):
        assert select_streaming_locator([], "l1") is None


class TestValueObjectParsing:

    def test_locator_from_resource(self):
        locator = StreamingLocator.from_dict(
            {
                "name": "loc",
                "properties": {
                    "streamingLocatorId": LOCATOR_ID,
                    "assetName": "asset-1",
                    "streamingPolicyName": "Predefined_ClearStreamingOnly",
                },
            }
        )
        assert locator.streaming_locator_id == LOCATOR_ID
        assert locator.streaming_policy_name == "Predefined_ClearStreamingOnly"

    def test_locator_from_flat_listing_entry(self):
        locator = StreamingLocator.from_dict({"name": "loc", "streamingLocatorId": LOCATOR_ID})
        assert locator.streaming_locator_id == LOCATOR_ID

    def test_endpoint_from_resource(self):
        endpoint = StreamingEndpoint.from_dict(
            {"name": "default", "properties": {"hostName": "h.example", "resourceState": "Running"}}
        )
        assert endpoint.is_running()
        assert endpoint.host_name == "h.example"

    def test_streaming_path(self):
        path = StreamingPath.from_dict(
            {"streamingProtocol": "SmoothStreaming", "encryptionScheme": "NoEncryption", "paths": ["/x"]}
        )
        assert path.streaming_protocol == StreamingProtocol.SMOOTH_STREAMING
        assert path.has_paths()


class TestResolveSmoothStreamingUri:

    def test_uri_built_from_endpoint_host_and_first_path(self, resolver, repo):
        repo.locators["asset-1"] = [create_streaming_locator()]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["locator-1"] = [
            StreamingPath(StreamingProtocol.HLS, paths=("/hls/path",)),
            create_smooth_path("/a/asset.ism/manifest", "/b/asset.ism/manifest"),
        ]

        resolved = resolver.resolve_smooth_streaming_uri("asset-1")

        assert resolved.uri == f"https://{DEFAULT_HOST}/a/asset.ism/manifest"
        assert resolved.empty_live_output is False

    def test_none_without_locators(self, resolver, repo):
        repo.endpoints = [create_streaming_endpoint()]
        assert resolver.resolve_smooth_streaming_uri("asset-1") is None

    def test_none_without_endpoints(self, resolver, repo):
        repo.locators["asset-1"] = [create_streaming_locator()]
        assert resolver.resolve_smooth_streaming_uri("asset-1") is None

    def test_none_without_smooth_streaming_path(self, resolver, repo):
        repo.locators["asset-1"] = [create_streaming_locator()]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["locator-1"] = [StreamingPath(StreamingProtocol.DASH, paths=("/d",))]

        assert resolver.resolve_smooth_streaming_uri("asset-1") is None

    def test_none_when_protocol_has_no_paths_and_no_live_output(self, resolver, repo):
        repo.locators["asset-1"] = [create_streaming_locator()]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["locator-1"] = [create_smooth_path()]

        assert resolver.resolve_smooth_streaming_uri("asset-1") is None

    def test_live_output_uri_is_synthesized(self, resolver, repo):
        repo.locators["asset-1"] = [create_streaming_locator()]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["locator-1"] = [create_smooth_path()]

        resolved = resolver.resolve_smooth_streaming_uri(
            "asset-1", live_output=LiveOutput(name="live-1", manifest_name="channel")
        )

        assert resolved.uri == f"https://{DEFAULT_HOST}/{LOCATOR_ID}/channel.ism/manifest"
        assert resolved.empty_live_output is True

    def test_named_locator_is_used(self, resolver, repo):
        repo.locators["asset-1"] = [
            create_streaming_locator("l1", "id-1"),
            create_streaming_locator("l2", "id-2"),
        ]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["l1"] = [create_smooth_path("/one/manifest")]
        repo.paths["l2"] = [create_smooth_path("/two/manifest")]

        resolved = resolver.resolve_smooth_streaming_uri("asset-1", "l2")

        assert resolved.uri.endswith("/two/manifest")

    def test_custom_scheme(self, repo, downloader):
        resolver = StreamingUriResolver(repo, downloader, scheme="http")
        repo.locators["asset-1"] = [create_streaming_locator()]
        repo.endpoints = [create_streaming_endpoint()]
        repo.paths["locator-1"] = [create_smooth_path("/p/manifest")]

        assert resolver.resolve_smooth_streaming_uri("asset-1").uri.startswith("http://")


class TestGetClientManifest:

    def test_returns_downloaded_document(self, resolver, repo, downloader):
        uri = publish_asset(repo, downloader, "asset-1", "<SmoothStreamingMedia />")

        assert resolver.get_client_manifest("asset-1") == "<SmoothStreamingMedia />"
        assert downloader.fetched == [uri]

    def test_falls_back_to_default_locator(self, resolver, repo, downloader):
        publish_asset(repo, downloader, "asset-1", "<SmoothStreamingMedia />")

        assert resolver.get_client_manifest("asset-1", "missing-locator") == "<SmoothStreamingMedia />"

    def test_raises_when_no_uri_resolves(self, resolver):
        with pytest.raises(ClientManifestNotFoundError):
            resolver.get_client_manifest("asset-1")

    def test_download_failure_is_wrapped(self, resolver, repo, downloader):
        uri = publish_asset(repo, downloader, "asset-1", "<x />")
        del downloader.documents[uri]

        with pytest.raises(ClientManifestNotFoundError) as exc_info:
            resolver.get_client_manifest("asset-1")

        assert exc_info.value.original_error is not None
