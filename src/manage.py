"""Storefront database management CLI.

Provides commands to create and drop the database schema, and to seed a small
demo catalogue. Reuses the setup_db/drop_db utilities in storefront.utils.db.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Add demo products
"""

import argparse
import json
import sys

DEMO_PRODUCTS = [
    {
        "name": "Pro Laptop 15",
        "description": "A 15-inch laptop with a long-lasting battery for professionals on the move.",
        "price": 1299.0,
        "original_price": 1499.0,
        "category": "laptops",
        "brand": "Acme",
        "sku": "ACME-PL15",
        "quantity": 25,
        "tags": ["laptop", "work"],
        "is_featured": True,
    },
    {
        "name": "Noise Cancelling Headphones",
        "description": "Over-ear wireless headphones with active noise cancellation.",
        "price": 249.0,
        "category": "headphones",
        "brand": "Sonica",
        "sku": "SON-NC700",
        "quantity": 60,
        "tags": ["audio", "wireless"],
        "is_featured": True,
    },
    {
        "name": "USB-C Charger 65W",
        "description": "Compact gallium nitride charger for laptops and phones.",
        "price": 39.0,
        "category": "accessories",
        "brand": "Acme",
        "sku": "ACME-GAN65",
        "quantity": 8,
        "tags": ["charger"],
    },
]


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_products():
    from storefront.domain import storefront
    from storefront.product.management import AddProduct

    storefront.init()
    with storefront.domain_context():
        for product in DEMO_PRODUCTS:
            command = AddProduct(
                **{k: v for k, v in product.items() if k != "tags"},
                tags=json.dumps(product.get("tags", [])),
            )
            product_id = storefront.process(command, asynchronous=False)
            print(f"  {product['sku']} -> {product_id}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Add demo products to the catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_products()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
