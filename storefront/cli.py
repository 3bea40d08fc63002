import asyncio
import argparse
import logging
import sys

from storefront.client import ApiError, ProductCatalog, PurchaseFailed, StorefrontClient, dashboard_data, login
from storefront.client.views import format_money
from storefront.core.config import settings
from storefront.core.logging import configure_logging
from storefront.db.init_db import Database, init_db
from storefront.db.recreate_tables import recreate_tables
from storefront.utils.data_generator import DataGenerator

logger = logging.getLogger(__name__)


async def create_tables(args):
    """Create tables and indexes."""
    database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    try:
        await init_db(database)
    finally:
        await database.dispose()


async def reset_tables(args):
    """Drop and recreate all tables."""
    database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    try:
        await recreate_tables(database)
    finally:
        await database.dispose()


async def generate_data(args):
    """Generate sample data."""
    logger.info("Starting data generation...")
    database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    try:
        await init_db(database)
        generator = DataGenerator(database, seed=args.seed)
        await generator.generate_customers(args.customers)
        await generator.generate_products(args.products)
        await generator.generate_purchases(args.purchases)
    except Exception as e:
        logger.error(f"Error generating data: {e}")
        raise
    finally:
        await database.dispose()


async def show_catalog(args):
    user = login(args.email, settings.ADMIN_EMAILS) if args.email else None
    async with StorefrontClient(args.api_url) as client:
        if user:
            catalog = ProductCatalog(client, user)
            await catalog.load()
            products = catalog.visible(show_purchased=args.purchased)
        else:
            products = await client.list_products()

    if args.purchased and not products:
        print("No products purchased yet.")
    for product in products:
        print(f"{product.id:>5}  {product.name:<30} {format_money(product.price):>10}  {product.region}")


async def show_history(args):
    async with StorefrontClient(args.api_url) as client:
        purchases = await client.get_customer_purchases(args.email)
    for purchase in purchases:
        print(
            f"{purchase.created_at}  {purchase.product.name:<30} "
            f"x{purchase.quantity:<3} {format_money(purchase.total_price):>10}"
        )


async def buy(args):
    user = login(args.email, settings.ADMIN_EMAILS)
    async with StorefrontClient(args.api_url) as client:
        catalog = ProductCatalog(client, user)
        try:
            purchase = await catalog.purchase(args.product_id, args.quantity)
        except PurchaseFailed as e:
            print(str(e), file=sys.stderr)
            return 1
    print(f"Purchased {purchase.quantity} x {purchase.product.name} for {format_money(purchase.total_price)}")
    return 0


async def show_report(args):
    async with StorefrontClient(args.api_url) as client:
        data = dashboard_data(await client.get_sales_report())

    summary = data["summary"]
    print(f"Total purchases: {summary['total_purchases']}")
    print(f"Total revenue:   {format_money(summary['total_revenue'])}")
    print(f"Average ticket:  {format_money(summary['average_ticket'])}")
    print()
    for row in data["products"]:
        print(f"{row['name']:<30} {row['sales']:>6} {format_money(row['revenue']):>12}  {row['region']}")
    print()
    for region in data["regions"]:
        print(f"{region['name']:<15} {region['value']:>6}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Storefront CLI",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--api-url", type=str, default=settings.API_URL,
        help="Base URL of the storefront API"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=settings.PORT)

    subparsers.add_parser("init-db", help="Create tables")
    subparsers.add_parser("recreate-db", help="Drop and recreate all tables")

    seed_parser = subparsers.add_parser("seed", help="Generate sample data")
    seed_parser.add_argument("--customers", type=int, default=20, help="Number of customers to generate")
    seed_parser.add_argument("--products", type=int, default=10, help="Number of products to generate")
    seed_parser.add_argument("--purchases", type=int, default=3, help="Maximum purchases per customer")
    seed_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    catalog_parser = subparsers.add_parser("catalog", help="List products")
    catalog_parser.add_argument("--email", type=str, default=None, help="Customer email")
    catalog_parser.add_argument("--purchased", action="store_true", help="Only products the customer bought")

    history_parser = subparsers.add_parser("history", help="Purchase history of a customer")
    history_parser.add_argument("email", type=str)

    buy_parser = subparsers.add_parser("buy", help="Buy a product")
    buy_parser.add_argument("email", type=str)
    buy_parser.add_argument("product_id", type=int)
    buy_parser.add_argument("--quantity", type=int, default=1)

    subparsers.add_parser("report", help="Sales report")

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)

    if args.command == "serve":
        from storefront.main import run
        run(host=args.host, port=args.port)
        return 0

    commands = {
        "init-db": create_tables,
        "recreate-db": reset_tables,
        "seed": generate_data,
        "catalog": show_catalog,
        "history": show_history,
        "buy": buy,
        "report": show_report,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        return asyncio.run(command(args)) or 0
    except ApiError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
