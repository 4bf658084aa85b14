"""Tests for parsing functions."""
from bookinfo.parse import (
    parse_book, parse_books_response, parse_authors, strip_isbn_prefix, build_bibkeys
)


def test_parse_book_complete():
    """Test parsing an entry with all fields present."""
    entry = {
        "title": "Fantastic Mr Fox",
        "subtitle": "A Puffin Book",
        "authors": [
            {"url": "https://openlibrary.org/authors/OL34184A/Roald_Dahl", "name": "Roald Dahl"}
        ],
        "number_of_pages": 96,
        "publish_date": "October 1, 1988"
    }

    book = parse_book("ISBN:9780140328721", entry)

    assert book is not None
    assert book.isbn == "9780140328721"
    assert book.title == "Fantastic Mr Fox"
    assert book.subtitle == "A Puffin Book"
    assert book.authors == ["Roald Dahl"]
    assert book.number_of_pages == "96"
    assert book.publish_date == "October 1, 1988"


def test_parse_book_missing_fields():
    """Test parsing an entry with missing optional fields."""
    book = parse_book("ISBN:123", {"title": "Mystery Book", "subtitle": None})

    assert book is not None
    assert book.title == "Mystery Book"
    assert book.subtitle is None
    assert book.authors == []
    assert book.number_of_pages is None
    assert book.publish_date is None


def test_parse_book_no_title():
    """Test that an entry without a title is skipped."""
    book = parse_book("ISBN:123", {"subtitle": "Only a subtitle"})
    assert book is None


def test_parse_authors_keeps_order():
    authors = [{"name": "Terry Pratchett"}, {"url": "x"}, {"name": "Neil Gaiman"}]
    assert parse_authors(authors) == ["Terry Pratchett", "Neil Gaiman"]
    assert parse_authors(None) == []


def test_strip_isbn_prefix():
    assert strip_isbn_prefix("ISBN:9780439023528") == "9780439023528"
    assert strip_isbn_prefix("9780439023528") == "9780439023528"


def test_build_bibkeys():
    assert build_bibkeys({"2", "1"}) == "ISBN:1,ISBN:2"


def test_parse_books_response():
    """Test parsing a complete API response."""
    response = {
        "ISBN:1": {"title": "Book 1", "authors": [{"name": "A"}, {"name": "B"}]},
        "ISBN:2": {"title": "Book 2"},
        "ISBN:3": {"subtitle": "No title here"},
        "ISBN:4": "not an object"
    }

    books = parse_books_response(response)

    assert set(books) == {"1", "2"}
    assert books["1"].title == "Book 1"
    assert books["1"].authors == ["A", "B"]
    assert books["2"].title == "Book 2"


def test_parse_books_response_unexpected_type():
    assert parse_books_response([]) == {}
    assert parse_books_response({}) == {}
