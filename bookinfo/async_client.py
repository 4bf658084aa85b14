"""Async HTTP client for the Open Library Books API."""
import httpx
from typing import Dict, Iterable
import logging

from bookinfo.models import BookInfo
from bookinfo.parse import build_bibkeys, parse_books_response

logger = logging.getLogger(__name__)


class AsyncOpenLibraryClient:
    """Async client; callers await each batch before issuing the next."""

    BASE_URL = "https://openlibrary.org/api/books"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: int = 10,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Initialize async client.

        Args:
            base_url: Books API endpoint
            timeout: Request timeout
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch_books(self, isbns: Iterable[str]) -> Dict[str, BookInfo]:
        """
        Look up metadata for a set of ISBNs with a single request.

        Args:
            isbns: ISBNs to look up

        Returns:
            Mapping from ISBN to BookInfo; empty on any request failure
        """
        isbns = set(isbns)
        if not isbns:
            return {}

        params = {
            "bibkeys": build_bibkeys(isbns),
            "jscmd": "data",
            "format": "json"
        }

        try:
            logger.info(f"Async request for {len(isbns)} ISBN(s)")
            response = await self.client.get(self.base_url, params=params)

            if response.status_code != 200:
                logger.warning(f"Status {response.status_code} for {len(isbns)} ISBN(s)")
                return {}

            return parse_books_response(response.json())

        except httpx.HTTPError as e:
            logger.error(f"Async request failed: {e}")
            return {}

        except ValueError as e:
            logger.error(f"Could not decode API response: {e}")
            return {}

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
