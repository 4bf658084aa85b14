"""Resolve ISBN lines into report records, cache first and batch-fetch the rest."""
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Set
import logging

from bookinfo.cache import BookCache
from bookinfo.models import BookInfo, BookRecord, DataRetrievalType

logger = logging.getLogger(__name__)

FetchBooks = Callable[[Set[str]], Dict[str, BookInfo]]
AsyncFetchBooks = Callable[[Set[str]], Awaitable[Dict[str, BookInfo]]]


def split_isbns(line: str) -> List[str]:
    """
    Split a raw input line into ISBNs.

    Args:
        line: Comma-separated ISBNs

    Returns:
        ISBNs exactly as written, in original order, duplicates kept,
        empty fragments dropped
    """
    return [fragment for fragment in line.split(",") if fragment]


class _ResolverBase:
    """Shared per-line bookkeeping for the sync and async resolvers."""

    def __init__(self, cache: Optional[BookCache] = None):
        self.cache = cache if cache is not None else BookCache()

    def _merge(self, row_number: int, books: Dict[str, BookInfo], missing: Set[str]):
        self.cache.update(books)
        absent = missing - set(books)
        if absent:
            logger.warning(f"Row {row_number}: no metadata for {', '.join(sorted(absent))}")

    def _emit(
        self,
        row_number: int,
        isbns: List[str],
        missing: Set[str]
    ) -> List[BookRecord]:
        """Build the line's records from the cache as it is after the fetch."""
        records = []
        for isbn in isbns:
            book = self.cache.get(isbn)
            if book is None:
                continue

            retrieval_type = DataRetrievalType.SERVER if isbn in missing else DataRetrievalType.CACHE
            records.append(BookRecord.from_book(row_number, retrieval_type, book))
        return records


class BookResolver(_ResolverBase):
    """Cache-then-batch-fetch loop using a blocking fetcher."""

    def __init__(self, fetch: FetchBooks, cache: Optional[BookCache] = None):
        """
        Args:
            fetch: Callable taking a set of ISBNs and returning ISBN -> BookInfo
            cache: Cache to use; a fresh one is created when omitted
        """
        super().__init__(cache)
        self.fetch = fetch

    def _fetch(self, row_number: int, missing: Set[str]) -> Dict[str, BookInfo]:
        self.cache.fetches += 1
        try:
            return self.fetch(missing)
        except Exception as e:
            logger.error(f"Row {row_number}: fetch failed: {e}")
            return {}

    def process_line(self, row_number: int, line: str) -> List[BookRecord]:
        """Resolve one input line; at most one fetch call is made."""
        isbns = split_isbns(line)
        if not isbns:
            return []

        missing = self.cache.missing(isbns)
        if missing:
            logger.info(f"Row {row_number}: {len(missing)} ISBN(s) not cached, fetching")
            books = self._fetch(row_number, missing)
            self._merge(row_number, books, missing)
        else:
            logger.debug(f"Row {row_number}: all ISBNs served from cache")

        return self._emit(row_number, isbns, missing)

    def process(self, lines: Iterable[str]) -> List[BookRecord]:
        """
        Resolve every line in order.

        Args:
            lines: Raw input lines; row numbers are their 1-based positions

        Returns:
            Records for every resolved ISBN occurrence
        """
        records = []
        for row_number, line in enumerate(lines, 1):
            records.extend(self.process_line(row_number, line))
        return records


class AsyncBookResolver(_ResolverBase):
    """Same loop as BookResolver, awaiting each fetch before moving on."""

    def __init__(self, fetch: AsyncFetchBooks, cache: Optional[BookCache] = None):
        super().__init__(cache)
        self.fetch = fetch

    async def _fetch(self, row_number: int, missing: Set[str]) -> Dict[str, BookInfo]:
        self.cache.fetches += 1
        try:
            return await self.fetch(missing)
        except Exception as e:
            logger.error(f"Row {row_number}: fetch failed: {e}")
            return {}

    async def process_line(self, row_number: int, line: str) -> List[BookRecord]:
        isbns = split_isbns(line)
        if not isbns:
            return []

        missing = self.cache.missing(isbns)
        if missing:
            logger.info(f"Row {row_number}: {len(missing)} ISBN(s) not cached, fetching")
            books = await self._fetch(row_number, missing)
            self._merge(row_number, books, missing)

        return self._emit(row_number, isbns, missing)

    async def process(self, lines: Iterable[str]) -> List[BookRecord]:
        records = []
        for row_number, line in enumerate(lines, 1):
            records.extend(await self.process_line(row_number, line))
        return records
