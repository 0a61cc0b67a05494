"""Cartflow management CLI.

Usage:
    python src/manage.py seed-catalogue products.json   # Register products
    python src/manage.py issue-token cust-001           # Print a bearer token

``seed-catalogue`` writes through the configured database provider; with
the default in-memory provider use CATALOGUE_SEED_FILE on the app instead.
"""

import argparse
import sys


def seed(path):
    """Register the products listed in a JSON file."""
    from ordering.catalogue.seed import load_records, seed_catalogue
    from ordering.domain import ordering

    print("Initializing ordering domain...")
    ordering.init()
    with ordering.domain_context():
        product_ids = seed_catalogue(load_records(path))

    for product_id in product_ids:
        print(f"  registered {product_id}")
    print(f"Done. {len(product_ids)} product(s) registered.")


def issue(customer_id, ttl_minutes=None):
    """Print a bearer token for a customer."""
    from ordering.api.auth import issue_token

    print(issue_token(customer_id, ttl_minutes=ttl_minutes))


def main():
    parser = argparse.ArgumentParser(description="Cartflow management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    seed_parser = subparsers.add_parser("seed-catalogue", help="Register products from a JSON file")
    seed_parser.add_argument("path", help="JSON file with a list of products")

    token_parser = subparsers.add_parser("issue-token", help="Print a bearer token for a customer")
    token_parser.add_argument("customer_id")
    token_parser.add_argument("--ttl-minutes", type=int, default=None)

    args = parser.parse_args()

    if args.command == "seed-catalogue":
        seed(args.path)
    elif args.command == "issue-token":
        issue(args.customer_id, ttl_minutes=args.ttl_minutes)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
