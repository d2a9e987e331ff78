from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

from ..errors import DownloadFailure

logger = logging.getLogger(__name__)


def is_remote_source(value: str) -> bool:
    return urlparse(value).scheme.lower() in ("http", "https")


class ImageDownloader:
    """Fetch a remote source image to a local file."""

    def __init__(self, timeout: float = 20.0, client: httpx.Client | None = None) -> None:
        self.timeout = timeout
        self._client = client

    def download(self, url: str, destination: Path) -> Path:
        logger.info("Downloading source image %s", url)
        try:
            if self._client is not None:
                self._fetch(self._client, url, destination)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    self._fetch(client, url, destination)
        except (httpx.HTTPError, OSError) as exc:
            raise DownloadFailure(f"Unable to download {url}: {exc}") from exc
        logger.debug("Stored %s at %s", url, destination)
        return destination

    def _fetch(self, client: httpx.Client, url: str, destination: Path) -> None:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with destination.open("wb") as handle:
                for chunk in response.iter_bytes():
                    handle.write(chunk)
