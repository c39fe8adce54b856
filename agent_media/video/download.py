"""Artifact download for finished generations.

Streams the provider-hosted file to the resolved destination path. The file is
written as-is; no transcoding or inspection takes place.

Error handling strategy:
    HTTP-layer failures propagate via `requests.raise_for_status()`. A partially
    written file is removed before the exception leaves this module.
"""

import logging
import os

import requests

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT_SECONDS = 120
CHUNK_SIZE = 1024 * 64


def download_artifact(url: str, destination: str, timeout: float = DOWNLOAD_TIMEOUT_SECONDS) -> str:
    """Download `url` to `destination` and return the destination path."""
    parent = os.path.dirname(destination)
    if parent:
        os.makedirs(parent, exist_ok=True)

    logger.info("Downloading artifact to %s", destination)
    with requests.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except BaseException:
            if os.path.exists(destination):
                os.remove(destination)
            raise

    return destination
