"""
Movie Dataset Source.

Downloads the IMDB movie CSV over HTTPS with httpx, or reuses a local copy.

Exports:
    DatasetDownloader: Fetch the CSV to a local path
"""

from pathlib import Path
from typing import Optional

import httpx

from config.defaults import DatasetDefaults
from exceptions import DatasetNotFoundError
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "DatasetDownloader")


class DatasetDownloader:
    """
    Fetch the movie CSV.

    Args:
        url: CSV download URL
        timeout: Download timeout in seconds
        transport: Optional httpx transport (tests)
    """

    def __init__(self, url: str = DatasetDefaults.URL,
                 timeout: float = DatasetDefaults.DOWNLOAD_TIMEOUT_SECONDS,
                 transport: Optional[httpx.BaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @log_exceptions(logger=logger)
    def fetch(self, destination: str, force: bool = False) -> Path:
        """
        Download the CSV to destination unless it is already there.

        Raises:
            DatasetNotFoundError: HTTP error status or transport failure
        """
        path = Path(destination)
        if path.exists() and not force:
            logger.info(f"📄 Using existing dataset: {path}")
            return path

        logger.info(f"⬇️ Downloading dataset: {self.url}")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport,
                              follow_redirects=True) as client:
                response = client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DatasetNotFoundError(
                f"Dataset download failed with HTTP {e.response.status_code}: {self.url}"
            ) from e
        except httpx.HTTPError as e:
            raise DatasetNotFoundError(f"Dataset download failed: {e}") from e

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
        logger.info(f"✅ Dataset saved: {path} ({len(response.content)} bytes)")
        return path
