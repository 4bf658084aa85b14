"""Tests for report rendering, file IO and the cache."""
import pytest

from bookinfo.cache import BookCache
from bookinfo.files import read_isbn_lines, render_report, write_report
from bookinfo.models import BookInfo, BookRecord, DataRetrievalType, REPORT_HEADER
from bookinfo.resolver import split_isbns


HEADER = "Row Number;Data Retrieval Type;ISBN;Title;Subtitle;Author Name(s);Number of Pages;Publish Date"


def make_record(**overrides):
    book = BookInfo(
        isbn="9780140328721",
        title="Fantastic Mr Fox",
        authors=["Roald Dahl", "Quentin Blake"],
        number_of_pages="96",
        publish_date="October 1, 1988"
    )
    record = BookRecord.from_book(1, DataRetrievalType.SERVER, book)
    for name, value in overrides.items():
        setattr(record, name, value)
    return record


def test_header_is_fixed():
    assert REPORT_HEADER == HEADER
    assert render_report([]) == HEADER + "\n"


def test_record_row_format():
    row = make_record().to_csv_row()
    assert row == '1;Server;9780140328721;Fantastic Mr Fox;N/A;"Roald Dahl;Quentin Blake";96;October 1, 1988'


def test_record_row_missing_fields():
    record = make_record(
        retrieval_type=DataRetrievalType.CACHE,
        authors=[],
        number_of_pages=None,
        publish_date=None
    )
    assert record.to_csv_row() == '1;Cache;9780140328721;Fantastic Mr Fox;N/A;"";N/A;N/A'


def test_write_report_creates_directory(tmp_path):
    path = tmp_path / "output" / "report.csv"

    assert write_report(str(path), [make_record()]) is True

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == HEADER
    assert lines[1].startswith("1;Server;9780140328721;")


def test_write_report_failure_returns_false(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")

    assert write_report(str(blocker / "report.csv"), []) is False


def test_read_isbn_lines(tmp_path):
    path = tmp_path / "isbns.txt"
    path.write_text("1,2\n\n3\r\n", encoding="utf-8")

    assert read_isbn_lines(str(path)) == ["1,2", "", "3"]


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        read_isbn_lines(str(tmp_path / "missing.txt"))


def test_cache_missing_and_stats():
    cache = BookCache()
    cache.update({"1": BookInfo(isbn="1", title="One")})

    assert cache.missing(["1", "2", "2"]) == {"2"}
    assert "1" in cache
    assert len(cache) == 1

    cache.update({"2": BookInfo(isbn="2", title="Two")})
    assert cache.get("2").title == "Two"
    assert cache.stats() == {"cached_books": 2, "hits": 1, "misses": 1, "fetch_calls": 0}


def test_read_isbn_lines_drops_byte_order_mark(tmp_path):
    path = tmp_path / "isbns.txt"
    path.write_bytes("\ufeff9780140328721,9780439023528\n".encode("utf-8"))

    lines = read_isbn_lines(str(path))

    assert lines == ["9780140328721,9780439023528"]
    assert split_isbns(lines[0])[0] == "9780140328721"


def test_read_isbn_lines_splits_only_on_newlines(tmp_path):
    path = tmp_path / "isbns.txt"
    path.write_bytes(b"1\x0c2\n3\r\n4\r5\n")

    assert read_isbn_lines(str(path)) == ["1\x0c2", "3", "4", "5"]
