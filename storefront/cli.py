"""Product import command.

Loads a ``;``-separated product feed into the catalog database.

Usage:
    storefront-import
    storefront-import sample-data/products.csv
    storefront-import products.csv --batch-size 500 --create-tables
"""

import argparse
import asyncio
import sys

import structlog

from storefront.catalog.exceptions import CatalogError
from storefront.catalog.importer import ImportSummary
from storefront.catalog.service import CatalogService
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import async_session_factory, create_tables, engine
from storefront.infrastructure.logging import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="storefront-import",
        description="Import products from CSV (identifier;name;category_id;category;price;net_price;image_url[;description])",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=settings.import_default_file,
        help=f"CSV file path (default: {settings.import_default_file})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.import_batch_size,
        help=f"Rows per commit (default: {settings.import_batch_size})",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create database tables before importing",
    )
    return parser


async def import_products(path: str, batch_size: int, create: bool = False) -> ImportSummary:
    """Run an import in its own session.

    Args:
        path: Feed file path.
        batch_size: Rows per commit.
        create: Whether to create tables first.

    Returns:
        Import counters.
    """
    try:
        if create:
            await create_tables()
        async with async_session_factory() as session:
            service = CatalogService(session)
            return await service.import_products(path, batch_size=batch_size)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments, defaults to sys.argv.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    if args.batch_size < 1:
        print("Error: --batch-size must be positive", file=sys.stderr)
        return 2

    configure_logging()

    try:
        summary = asyncio.run(
            import_products(args.file, args.batch_size, create=args.create_tables)
        )
    except CatalogError as e:
        logger.error("Catalog import failed", error=e.message, **e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(
        f"Imported: {summary.imported}, "
        f"Updated: {summary.updated}, "
        f"Skipped: {summary.skipped}"
    )
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
