#!/usr/bin/env python3
"""Book Info CLI - resolve ISBNs into a metadata report."""
import argparse
import asyncio
import sys
from tabulate import tabulate
from bookinfo.client import OpenLibraryClient
from bookinfo.async_client import AsyncOpenLibraryClient
from bookinfo.cache import BookCache
from bookinfo.files import read_isbn_lines, write_report
from bookinfo.resolver import BookResolver, AsyncBookResolver
from bookinfo.config import Config
import logging

logger = logging.getLogger(__name__)


def resolve_sync(lines, config: Config, cache: BookCache):
    """Resolve lines with the blocking client."""
    with OpenLibraryClient(
        base_url=config.OPENLIBRARY_URL,
        timeout=config.DEFAULT_TIMEOUT
    ) as client:
        resolver = BookResolver(client.fetch_books, cache)
        return resolver.process(lines)


async def resolve_async(lines, config: Config, cache: BookCache):
    """Resolve lines with the async client, one request at a time."""
    async with AsyncOpenLibraryClient(
        base_url=config.OPENLIBRARY_URL,
        timeout=config.DEFAULT_TIMEOUT
    ) as client:
        resolver = AsyncBookResolver(client.fetch_books, cache)
        return await resolver.process(lines)


def display_records(records, format_type: str):
    """Display emitted records in specified format."""
    if format_type == "table":
        headers = ["Row", "Source", "ISBN", "Title", "Authors", "Pages", "Published"]
        rows = [
            [
                record.row_number,
                record.retrieval_type.value,
                record.isbn,
                record.title[:50] + "..." if len(record.title) > 50 else record.title,
                record.authors_str[:30] + "..." if len(record.authors_str) > 30 else record.authors_str,
                record.number_of_pages or "N/A",
                record.publish_date or "N/A"
            ]
            for record in records
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "compact":
        for record in records:
            print(f"{record.row_number}. [{record.retrieval_type.value}] {record.isbn} - {record.title}")


def run(args, config: Config) -> int:
    """Run the report; returns the process exit status."""
    input_file = args.input or config.INPUT_FILE
    output_file = args.output or config.OUTPUT_FILE

    try:
        lines = read_isbn_lines(input_file)
    except OSError as e:
        logger.error(f"An error occurred while reading file {input_file}: {e}")
        return 1

    cache = BookCache()
    if args.use_async:
        records = asyncio.run(resolve_async(lines, config, cache))
    else:
        records = resolve_sync(lines, config, cache)

    logger.info(f"Resolved {len(records)} record(s) from {len(lines)} line(s)")
    logger.info(f"Cache stats: {cache.stats()}")

    written = write_report(output_file, records)
    display_records(records, args.format)

    return 0 if written else 1


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Info - resolve ISBNs to metadata with an in-run cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the configured input and output files
  %(prog)s

  # Explicit files, async client, no console table
  %(prog)s --input isbns.txt --output report.csv --async --format none
        """
    )
    parser.add_argument("--input", help="ISBN input file (default: INPUT_FILE)")
    parser.add_argument("--output", help="Report output file (default: OUTPUT_FILE)")
    parser.add_argument("--format", choices=["table", "compact", "none"], default="table", help="Console summary format")
    parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    config = Config()

    try:
        status = run(args, config)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
