"""
Google Cloud Storage Configuration

Builds the GCS client used by the container access repository.
"""

import logging
import os

from google.cloud import storage
from google.oauth2 import service_account

logger = logging.getLogger(__name__)


def create_gcs_client() -> storage.Client:
    """
    Create a GCS client.

    Uses the service account key at GOOGLE_APPLICATION_CREDENTIALS when the
    file exists, otherwise application default credentials. Signing the
    container grant URLs requires credentials that can sign; service account
    keys can.

    Raises:
        google.auth.exceptions.DefaultCredentialsError: If no credentials are found
    """
    credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

    if credentials_path and os.path.exists(credentials_path):
        credentials = service_account.Credentials.from_service_account_file(credentials_path)
        logger.info(f"GCS client initialized with service account: {credentials_path}")
        return storage.Client(credentials=credentials, project=credentials.project_id)

    client = storage.Client()
    logger.info("GCS client initialized with default credentials")
    return client
