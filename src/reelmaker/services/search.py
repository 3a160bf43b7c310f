"""Serper.dev web search client."""

import logging
from typing import Optional

import requests

from ..config import config
from ..errors import ConfigurationError, ProviderError
from ..models import SearchResult

logger = logging.getLogger(__name__)


class SerperClient:
    """Client for the Serper.dev Google search API."""

    DEFAULT_ENDPOINT = "https://google.serper.dev/search"
    DEFAULT_NUM_RESULTS = 5
    DEFAULT_TIMEOUT = 15.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        num_results: int = DEFAULT_NUM_RESULTS,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the search client.

        Args:
            api_key: Serper API key. Defaults to SERPER_API_KEY env var.
            endpoint: Search endpoint URL.
            num_results: Number of organic results to request.
            timeout: Request timeout in seconds.
            session: Optional requests session (for connection reuse).
        """
        self._api_key = api_key or config.serper_api_key
        if not self._api_key:
            raise ConfigurationError(
                "Search API key is not set. Set SERPER_API_KEY env var."
            )
        self._endpoint = endpoint
        self._num_results = num_results
        self._timeout = timeout
        self._session = session or requests.Session()

    def search(self, query: str) -> list[SearchResult]:
        """Run a web search.

        Args:
            query: Search query text.

        Returns:
            Ranked organic results with 1-based positions.

        Raises:
            ValueError: If the query is empty.
            ProviderError: If the request fails or returns a non-2xx status.
        """
        if not query or not query.strip():
            raise ValueError("Search query is required")

        headers = {
            "X-API-KEY": self._api_key,
            "Content-Type": "application/json",
        }
        body = {"q": query, "num": self._num_results}

        logger.info(f"Searching: {query[:80]}")
        try:
            response = self._session.post(
                self._endpoint, json=body, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.error(f"Search request failed: {e}")
            raise ProviderError("serper", str(e)) from e

        if not response.ok:
            error_msg = f"Search API returned {response.status_code}: {response.reason}"
            logger.error(error_msg)
            raise ProviderError("serper", error_msg)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("serper", f"Invalid JSON from search API: {e}") from e

        organic = data.get("organic") if isinstance(data, dict) else None
        items = [item for item in organic or [] if isinstance(item, dict)]
        results = [
            SearchResult(
                title=item.get("title") or "",
                link=item.get("link") or "",
                snippet=item.get("snippet") or "",
                position=index,
            )
            for index, item in enumerate(items, start=1)
        ]
        logger.debug(f"Search returned {len(results)} results")
        return results
