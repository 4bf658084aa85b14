"""Reading the ISBN input file and writing the report."""
import os
import logging
from typing import Iterable, List

from bookinfo.models import BookRecord, REPORT_HEADER

logger = logging.getLogger(__name__)


def read_isbn_lines(path: str) -> List[str]:
    """
    Read all lines of the input file.

    A leading byte-order mark is dropped; lines break only on CR, LF and CRLF.

    Raises:
        OSError: if the file cannot be read
    """
    logger.info(f"Reading {path}...")
    with open(path, "r", encoding="utf-8-sig") as f:
        return [line.rstrip("\r\n") for line in f]


def render_report(records: Iterable[BookRecord]) -> str:
    """Render the header and one line per record."""
    lines = [REPORT_HEADER]
    lines.extend(record.to_csv_row() for record in records)
    return "\n".join(lines) + "\n"


def write_report(path: str, records: Iterable[BookRecord]) -> bool:
    """
    Write the report, creating the output directory if needed.

    Args:
        path: Output file path
        records: Records to write

    Returns:
        True if successful, False otherwise
    """
    content = render_report(records)

    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logger.info(f"Writing {path}...")
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        logger.info("File successfully written!")
        return True
    except OSError as e:
        logger.error(f"An error occurred while writing file {path}: {e}")
        return False
