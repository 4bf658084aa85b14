"""Data models for book metadata and report rows."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


AUTHOR_SEPARATOR = ";"
MISSING_VALUE = "N/A"
REPORT_HEADER = (
    "Row Number;Data Retrieval Type;ISBN;Title;Subtitle;"
    "Author Name(s);Number of Pages;Publish Date"
)


class DataRetrievalType(Enum):
    """Where a report row's metadata came from."""
    SERVER = "Server"
    CACHE = "Cache"


@dataclass
class BookInfo:
    """Metadata known for one ISBN. This is what the cache holds."""
    isbn: str
    title: str
    subtitle: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    number_of_pages: Optional[str] = None
    publish_date: Optional[str] = None


@dataclass
class BookRecord:
    """One output row: an ISBN occurrence on an input line plus its provenance."""
    row_number: int
    retrieval_type: DataRetrievalType
    isbn: str
    title: str
    subtitle: Optional[str]
    authors: List[str]
    number_of_pages: Optional[str]
    publish_date: Optional[str]

    @classmethod
    def from_book(
        cls,
        row_number: int,
        retrieval_type: DataRetrievalType,
        book: BookInfo
    ) -> "BookRecord":
        return cls(
            row_number=row_number,
            retrieval_type=retrieval_type,
            isbn=book.isbn,
            title=book.title,
            subtitle=book.subtitle,
            authors=list(book.authors),
            number_of_pages=book.number_of_pages,
            publish_date=book.publish_date
        )

    @property
    def authors_str(self) -> str:
        return AUTHOR_SEPARATOR.join(self.authors)

    def to_csv_row(self) -> str:
        """
        Render the record as one ``;``-delimited report line.

        Missing optional fields become ``N/A``; the author field is always
        wrapped in double quotes.
        """
        fields = [
            str(self.row_number),
            self.retrieval_type.value,
            self.isbn,
            self.title,
            self.subtitle or MISSING_VALUE,
            f'"{self.authors_str}"',
            self.number_of_pages or MISSING_VALUE,
            self.publish_date or MISSING_VALUE,
        ]
        return ";".join(fields)
