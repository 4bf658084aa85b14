"""In-memory book cache, scoped to a single run."""
from typing import Optional, Dict, Any, Iterable, Set
import logging

from bookinfo.models import BookInfo

logger = logging.getLogger(__name__)


class BookCache:
    """
    Mapping from ISBN to the most recently fetched BookInfo.

    Grows monotonically for the lifetime of the object: no eviction, no TTL.
    """

    def __init__(self):
        self._books: Dict[str, BookInfo] = {}
        self.hits = 0
        self.misses = 0
        self.fetches = 0

    def __contains__(self, isbn: str) -> bool:
        return isbn in self._books

    def __len__(self) -> int:
        return len(self._books)

    def get(self, isbn: str) -> Optional[BookInfo]:
        """Get cached metadata for an ISBN, or None."""
        return self._books.get(isbn)

    def update(self, books: Dict[str, BookInfo]):
        """Merge a fetch result into the cache."""
        for isbn, book in books.items():
            self._books[isbn] = book
        logger.debug(f"Cached {len(books)} book(s), {len(self._books)} total")

    def missing(self, isbns: Iterable[str]) -> Set[str]:
        """
        Distinct ISBNs absent from the cache right now.

        Also counts hits and misses per distinct ISBN.
        """
        distinct = set(isbns)
        missing = {isbn for isbn in distinct if isbn not in self}
        self.misses += len(missing)
        self.hits += len(distinct) - len(missing)
        return missing

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "cached_books": len(self),
            "hits": self.hits,
            "misses": self.misses,
            "fetch_calls": self.fetches
        }
