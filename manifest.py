"""Manifest fetching for agent-smith."""

from typing import Any

import httpx

from logging_setup import get_logger


REQUEST_TIMEOUT = 15.0

MANIFEST_FILES = {
    "core": "core.json",
    "plugin": "plugins.json",
    "theme": "themes.json",
}


def manifest_url(base_url: str, name: str) -> str:
    """Join base URL and manifest name with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{name}"


class ManifestFetcher:
    """Fetches JSON manifests from a GitHub-hosted repository.

    Any failure (missing configuration, transport error, non-2xx status,
    unparseable body) is reported as None, never raised.
    """

    def __init__(self, base_url: str, token: str):
        self.base_url = base_url
        self.token = token

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and bool(self.token)

    def fetch(self, name: str) -> Any | None:
        """Fetch and parse the named manifest, or return None on failure."""
        logger = get_logger()

        if not self.is_configured:
            logger.debug("Repository URL or token not set, skipping %s", name)
            return None

        # Header values go out as ASCII
        if not self.token.isascii():
            logger.warning("Token contains non-ASCII characters, skipping %s", name)
            return None

        url = manifest_url(self.base_url, name)
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github.v3.raw",
        }

        try:
            response = httpx.get(
                url,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
                follow_redirects=True,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.InvalidURL as e:
            logger.warning("Invalid repository URL %r: %s", url, e)
            return None
        except httpx.HTTPError as e:
            logger.warning("Error fetching %s: %s", url, e)
            return None
        except ValueError as e:
            logger.warning("Invalid JSON in %s: %s", url, e)
            return None

        logger.debug("Fetched %s", url)
        return data
