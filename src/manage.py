"""Storefront management commands.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py seed-products products.json
"""

import argparse
import json
import sys
from pathlib import Path


def setup_database():
    """Create database tables for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop database tables for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping database schema...")
    drop_db(storefront)
    print("Done.")


def seed_products(path):
    """List every product in a JSON file (a list of product objects) in the catalogue."""
    from protean.utils.globals import current_domain
    from storefront.catalogue.listing import AddProduct
    from storefront.domain import storefront

    products = json.loads(Path(path).read_text())
    if not isinstance(products, list):
        raise SystemExit(f"{path} must contain a JSON list of products")

    storefront.init()
    with storefront.domain_context():
        for entry in products:
            product_id = current_domain.process(
                AddProduct(
                    name=entry["name"],
                    description=entry.get("description"),
                    price=entry["price"],
                    category=entry.get("category"),
                    image_url=entry.get("image_url"),
                ),
                asynchronous=False,
            )
            print(f"  {entry['name']} -> {product_id}")

    print(f"Seeded {len(products)} products.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Load products from a JSON file")
    seed_parser.add_argument("path", help="JSON file holding a list of products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
