"""Parse and normalize Open Library Books API responses (``jscmd=data``)."""
import logging
from typing import Dict, Any, List, Optional
from bookinfo.models import BookInfo

logger = logging.getLogger(__name__)

ISBN_PREFIX = "ISBN:"


def strip_isbn_prefix(key: str) -> str:
    """Turn a response key such as ``ISBN:9780140328721`` into the bare ISBN."""
    if key.startswith(ISBN_PREFIX):
        return key[len(ISBN_PREFIX):]
    return key


def build_bibkeys(isbns) -> str:
    """Join ISBNs into a single ``bibkeys`` query value."""
    return ",".join(f"{ISBN_PREFIX}{isbn}" for isbn in sorted(isbns))


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def parse_authors(authors: Any) -> List[str]:
    """
    Extract author names in response order.

    Args:
        authors: ``authors`` value of an entry, a list of ``{"name": ...}`` objects

    Returns:
        List of names (empty if the field is missing or malformed)
    """
    if not isinstance(authors, list):
        return []

    names = []
    for author in authors:
        if isinstance(author, dict) and author.get("name"):
            names.append(str(author["name"]))
    return names


def parse_book(key: str, entry: Dict[str, Any]) -> Optional[BookInfo]:
    """
    Parse a single entry of an Open Library response.

    Args:
        key: Response key, e.g. ``ISBN:9780140328721``
        entry: Entry object for that key

    Returns:
        BookInfo or None if the entry has no usable title
    """
    try:
        isbn = strip_isbn_prefix(key)
        if not isbn:
            return None

        title = entry.get("title")
        if title is None:
            logger.warning(f"Skipping {key}: response entry has no title")
            return None

        return BookInfo(
            isbn=isbn,
            title=str(title),
            subtitle=_optional_text(entry.get("subtitle")),
            authors=parse_authors(entry.get("authors")),
            number_of_pages=_optional_text(entry.get("number_of_pages")),
            publish_date=_optional_text(entry.get("publish_date"))
        )
    except Exception as e:
        # One bad entry must not spoil the rest of the response
        logger.warning(f"Failed to parse entry {key}: {e}")
        return None


def parse_books_response(response_json: Any) -> Dict[str, BookInfo]:
    """
    Parse a full Open Library response.

    Args:
        response_json: Decoded response body, keyed by ``ISBN:<isbn>``

    Returns:
        Mapping from bare ISBN to BookInfo (empty if nothing usable was found)
    """
    if not isinstance(response_json, dict):
        logger.warning(f"Unexpected response type: {type(response_json).__name__}")
        return {}

    books = {}
    for key, entry in response_json.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping {key}: entry is not an object")
            continue

        book = parse_book(key, entry)
        if book:
            books[book.isbn] = book

    return books
