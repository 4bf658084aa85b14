"""HTTP client for the Open Library Books API."""
import requests
from typing import Dict, Iterable
import logging

from bookinfo.models import BookInfo
from bookinfo.parse import build_bibkeys, parse_books_response

logger = logging.getLogger(__name__)


class OpenLibraryClient:
    """Blocking client that looks up a batch of ISBNs in one request."""

    BASE_URL = "https://openlibrary.org/api/books"

    def __init__(self, base_url: str = BASE_URL, timeout: int = 10):
        """
        Initialize Open Library client.

        Args:
            base_url: Books API endpoint
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()

    def fetch_books(self, isbns: Iterable[str]) -> Dict[str, BookInfo]:
        """
        Look up metadata for a set of ISBNs with a single request.

        Args:
            isbns: ISBNs to look up

        Returns:
            Mapping from ISBN to BookInfo; empty on any request failure.
            ISBNs the service does not know are simply absent.
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
            logger.info(f"Requesting {len(isbns)} ISBN(s) from {self.base_url}")
            response = self.session.get(
                self.base_url,
                params=params,
                timeout=self.timeout
            )

            if response.status_code != 200:
                logger.error(f"Error in the API request. Status code: {response.status_code}")
                return {}

            logger.info(f"Success: {response.status_code}")
            books = parse_books_response(response.json())

        except requests.exceptions.RequestException as e:
            logger.error(f"Error during API request: {e}")
            return {}

        except ValueError as e:
            logger.error(f"Could not decode API response: {e}")
            return {}

        logger.info(f"Retrieved {len(books)}/{len(isbns)} book(s)")
        return books

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
