"""
Shared fixtures for the media orchestrator tests: Hypothesis profiles,
sample manifest documents, the in-memory repositories and tier markers.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from tests.fixtures.mock_repositories import (
    MockAssetContainer,
    MockContainerAccessRepository,
    MockManifestDownloader,
    MockMediaServicesRepository,
    MockStreamingRepository,
)

# Hypothesis profiles; pick one with --hypothesis-profile=ci
for _profile, _examples in (("default", 100), ("ci", 200), ("dev", 10)):
    settings.register_profile(
        _profile,
        max_examples=_examples,
        deadline=None,
        suppress_health_check=[HealthCheck.too_slow],
    )
settings.load_profile("default")


# =============================================================================
# Manifest Document Fixtures
# =============================================================================

@pytest.fixture
def server_manifest_xml() -> str:
    """A SMIL server manifest without a client manifest link."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<smil xmlns="http://www.w3.org/2001/SMIL20/Language">\n'
        "  <head>\n"
        '    <meta name="formats" content="mp4-v3" />\n'
        "  </head>\n"
        "  <body>\n"
        "    <switch>\n"
        '      <video src="movie_1080.mp4" />\n'
        '      <video src="movie_720.mp4" />\n'
        '      <audio src="movie_1080.mp4" title="movie_1080" />\n'
        "    </switch>\n"
        "  </body>\n"
        "</smil>\n"
    )


@pytest.fixture
def client_manifest_xml() -> str:
    """A client manifest carrying a Protection header."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<SmoothStreamingMedia MajorVersion="2" MinorVersion="2" Duration="600000000">\n'
        '  <StreamIndex Type="video" Chunks="2" QualityLevels="1">\n'
        '    <QualityLevel Index="0" Bitrate="3000000" FourCC="H264" />\n'
        '    <c t="0" d="20000000" />\n'
        "  </StreamIndex>\n"
        "  <Protection>\n"
        '    <ProtectionHeader SystemID="9a04f079-9840-4286-ab92-e65be0885f95">AAAA</ProtectionHeader>\n'
        "  </Protection>\n"
        "</SmoothStreamingMedia>\n"
    )


@pytest.fixture
def clear_client_manifest_xml() -> str:
    """A client manifest without a Protection header."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<SmoothStreamingMedia MajorVersion="2" MinorVersion="2" Duration="600000000">\n'
        '  <StreamIndex Type="audio" Chunks="1" QualityLevels="1">\n'
        '    <QualityLevel Index="0" Bitrate="128000" FourCC="AACL" />\n'
        "  </StreamIndex>\n"
        "</SmoothStreamingMedia>\n"
    )


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def asset_container() -> MockAssetContainer:
    """Empty in-memory asset container named 'asset-1'."""
    return MockAssetContainer("asset-1")


@pytest.fixture
def container_access_repository() -> MockContainerAccessRepository:
    return MockContainerAccessRepository()


@pytest.fixture
def streaming_repository() -> MockStreamingRepository:
    return MockStreamingRepository()


@pytest.fixture
def manifest_downloader() -> MockManifestDownloader:
    return MockManifestDownloader()


@pytest.fixture
def media_services_repository() -> MockMediaServicesRepository:
    return MockMediaServicesRepository()


# =============================================================================
# Time-related Fixtures
# =============================================================================

@pytest.fixture
def fixed_datetime():
    """2024-01-15 12:00 UTC."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def future_expiry():
    """Grant expiry five minutes from now."""
    return datetime.now(timezone.utc) + timedelta(minutes=5)


# =============================================================================
# Test tiers, keyed by the tests/ subdirectory they live in
# =============================================================================

TEST_TIERS = {
    "unit": "unit: Unit tests (fast, no external dependencies)",
    "integration": "integration: Integration tests (local filesystem, no external services)",
    "contracts": "contract: Contract tests (every implementation of an interface)",
    "property": "property: Property-based tests using Hypothesis",
}


def pytest_configure(config):
    for marker in TEST_TIERS.values():
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):
    """Mark each test with the tier of the tests/ subdirectory it is in."""
    tests_root = Path(__file__).parent
    for item in items:
        try:
            tier_dir = Path(str(item.fspath)).relative_to(tests_root).parts[0]
        except ValueError:
            continue
        marker = TEST_TIERS.get(tier_dir)
        if marker is not None:
            item.add_marker(getattr(pytest.mark, marker.split(":", 1)[0]))
