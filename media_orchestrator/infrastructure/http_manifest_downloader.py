"""
HTTP Manifest Downloader

Fetches manifests from streaming endpoints over HTTP(S).
"""

from typing import Optional

import requests

from media_orchestrator.domain.errors import ManifestDownloadError
from media_orchestrator.domain.streaming import IManifestDownloader


class HttpManifestDownloader(IManifestDownloader):
    """IManifestDownloader backed by a requests session."""

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        """
        Args:
            timeout: Connect and read timeout in seconds
            session: Session to use; a new one is created when omitted
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, uri: str) -> str:
        try:
            response = self.session.get(uri, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ManifestDownloadError(
                f"Failed to download manifest from {uri}: {e}", original_error=e
            ) from e

        # Manifests are UTF-8 unless the endpoint says otherwise
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response.text
