"""Command-line interface for the vendor catalog."""

import argparse
import json
import logging
import sys
from typing import List, Optional

import pandas as pd
from dotenv import load_dotenv

__all__ = ["main", "parse_args", "sync_catalog", "export_products_csv", "show_stats"]

from catalog.access import SERVICE_ADMIN
from catalog.client import fetch_storefront_products
from catalog.config import DB_PATH, OUTPUT_PATH
from catalog.db import get_all_products, get_connection, init_db, upsert_product
from catalog.errors import CatalogError
from catalog.logging_config import log_catalog_event, setup_logging
from catalog.models import Product

logger = logging.getLogger("catalog.cli")


def sync_catalog(db_path: str = DB_PATH, products: Optional[List[Product]] = None) -> int:
    """Fetch the vendor catalog and upsert every product into the local store.

    Args:
        db_path: Path to SQLite database
        products: Already-normalized products; fetched from the vendor when None

    Returns:
        Number of products written
    """
    if products is None:
        products = fetch_storefront_products()

    init_db(db_path)
    for product in products:
        upsert_product(db_path, product, SERVICE_ADMIN)

    log_catalog_event("sync_complete", {"count": len(products), "db_path": db_path})
    return len(products)


def _products_frame(db_path: str) -> pd.DataFrame:
    with get_connection(db_path) as conn:
        return pd.read_sql_query(
            "SELECT id, name, price, category, image_url, sizes, colors, tags, "
            "in_stock, is_new, is_limited, created_at, updated_at FROM products ORDER BY rowid",
            conn,
        )


def export_products_csv(db_path: str = DB_PATH, path: str = OUTPUT_PATH) -> int:
    """Write the stored products to CSV. Returns the row count."""
    df = _products_frame(db_path)
    df.to_csv(path, index=False)
    return len(df)


def show_stats(db_path: str = DB_PATH) -> pd.DataFrame:
    """Per-category product counts and price range."""
    df = _products_frame(db_path)
    if df.empty:
        return pd.DataFrame(columns=["category", "count", "min_price", "max_price"])
    return (
        df.groupby("category")
        .agg(count=("id", "count"), min_price=("price", "min"), max_price=("price", "max"))
        .reset_index()
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Printful catalog sync and inspection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the normalized vendor catalog as JSON
  python -m catalog.cli --print-json

  # Create the local database and sync the vendor catalog into it
  python -m catalog.cli --init-db --sync

  # Export stored products to CSV
  python -m catalog.cli --export-csv data/products.csv

  # Show per-category counts
  python -m catalog.cli --stats
        """,
    )
    parser.add_argument("--db", default=DB_PATH, help=f"SQLite database path (default: {DB_PATH})")
    parser.add_argument("--init-db", action="store_true", help="Create tables and triggers")
    parser.add_argument("--sync", action="store_true", help="Fetch vendor catalog into the database")
    parser.add_argument("--print-json", action="store_true", help="Fetch and print normalized products")
    parser.add_argument("--export-csv", metavar="PATH", help="Export stored products to CSV")
    parser.add_argument("--stats", action="store_true", help="Show database statistics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.init_db:
            init_db(args.db)
            logger.info("Initialized database at %s", args.db)

        if args.print_json:
            products = fetch_storefront_products()
            print(json.dumps([p.to_dict() for p in products], indent=2, ensure_ascii=False))

        if args.sync:
            count = sync_catalog(args.db)
            logger.info("Synced %d products into %s", count, args.db)

        if args.export_csv:
            count = export_products_csv(args.db, args.export_csv)
            logger.info("Exported %d products to %s", count, args.export_csv)

        if args.stats:
            init_db(args.db)
            stats = show_stats(args.db)
            print(f"Products: {len(get_all_products(args.db))}")
            if not stats.empty:
                print(stats.to_string(index=False))
    except CatalogError as e:
        logger.error("Catalog error: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
