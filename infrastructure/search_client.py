"""
Movie Search Client.

HTTP client for the MovieFinder search endpoint (normally fronted by API
Management). The page's fetch logic is the reference contract:

    GET {url}?title=<title>
    Ocp-Apim-Subscription-Key: <key>

    200 -> {"stats": {"Title": ..., "Year": ..., ...}}

Settings are passed in explicitly; the client never reads a settings store.

Usage:
    from core.models import SiteSettings
    from infrastructure.search_client import MovieSearchClient

    client = MovieSearchClient(SiteSettings(url=api_url, key=api_key))
    result = client.search("Inception")
    if result.found:
        print(result.stats.title)
"""

from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.defaults import SiteDefaults
from core.models import MovieSearchResult, SiteSettings
from exceptions import ConfigurationError, SearchNetworkError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "MovieSearchClient")


class MovieSearchClient:
    """
    Client for the movie search API.

    Args:
        settings: Search API url and subscription key
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(self, settings: SiteSettings,
                 timeout: float = SiteDefaults.SEARCH_TIMEOUT_SECONDS,
                 transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {SiteDefaults.SUBSCRIPTION_KEY_HEADER: self.settings.key}

    def search(self, title: str) -> MovieSearchResult:
        """
        Look up a movie by title.

        Raises:
            ConfigurationError: url or key missing
            SearchNetworkError: transport failure, non-2xx status, or a body that is
                not JSON or not a search response
        """
        if not self.settings.is_configured:
            raise ConfigurationError("Search API url and key must both be set")

        logger.info(f"🔍 Searching for movie: {title}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(
                    self.settings.url,
                    params={"title": title},
                    headers=self._headers(),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Search API returned HTTP {status}")
            raise SearchNetworkError(f"Search API returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning(f"Search API request failed: {e}")
            raise SearchNetworkError(f"Search API request failed: {e}") from e
        except ValueError as e:
            raise SearchNetworkError(f"Search API returned invalid JSON: {e}") from e

        try:
            result = MovieSearchResult.from_response(payload)
        except PydanticValidationError as e:
            logger.warning(f"Search API returned an unexpected body: {e}")
            raise SearchNetworkError(f"Search API returned an unexpected body: {e}") from e

        logger.info(f"{'✅ Found' if result.found else '⚠️ No match for'}: {title}")
        return result
