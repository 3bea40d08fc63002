from decimal import Decimal
from typing import Any, Dict, List, Optional, Set
import logging

from storefront.client.api import ApiError, StorefrontClient
from storefront.client.session import User
from storefront.schemas.product import Product
from storefront.schemas.purchase import PurchaseWithProduct
from storefront.schemas.report import SalesReport

logger = logging.getLogger(__name__)

PURCHASE_FAILED_MESSAGE = "Could not complete the purchase. Please try again."


class PurchaseFailed(Exception):
    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(PURCHASE_FAILED_MESSAGE)
        self.cause = cause


class ProductCatalog:
    """
    Product listing for one customer.

    Holds the product list and the ids of products the customer has bought.
    Purchases are not applied optimistically: the purchased ids are only
    reloaded after the server confirms a purchase.
    """

    def __init__(self, client: StorefrontClient, user: User):
        self.client = client
        self.user = user
        self.products: List[Product] = []
        self.purchased_product_ids: Set[int] = set()
        self.purchases: List[PurchaseWithProduct] = []

    async def load(self) -> None:
        self.products = await self.client.list_products()
        await self.load_purchases()

    async def load_purchases(self) -> None:
        try:
            self.purchases = await self.client.get_customer_purchases(self.user.email)
        except ApiError as e:
            if e.status_code != 404:
                raise
            # Not registered as a customer yet, so nothing bought
            self.purchases = []
        self.purchased_product_ids = {purchase.product.id for purchase in self.purchases}

    def visible(self, show_purchased: bool = False) -> List[Product]:
        if not show_purchased:
            return list(self.products)
        return [product for product in self.products if product.id in self.purchased_product_ids]

    async def purchase(self, product_id: int, quantity: int = 1) -> PurchaseWithProduct:
        try:
            purchase = await self.client.create_purchase(product_id, self.user.email, quantity)
        except ApiError as e:
            logger.error(f"Purchase of product {product_id} failed: {e}")
            raise PurchaseFailed(e) from e
        await self.load_purchases()
        return purchase


def dashboard_data(report: SalesReport) -> Dict[str, Any]:
    """
    Reshape a sales report into what the admin dashboard shows: summary
    cards, one chart row per product and units sold per region.
    """
    product_rows = [
        {
            "name": row.product.name,
            "sales": row.total_sales,
            "revenue": row.total_revenue,
            "region": row.product.region,
        }
        for row in report.sales_by_product
    ]

    # dicts keep first-seen order, which is the report's best-seller order
    regions: Dict[str, int] = {}
    for row in report.sales_by_product:
        regions[row.product.region] = regions.get(row.product.region, 0) + row.total_sales

    return {
        "summary": {
            "total_purchases": report.total_purchases,
            "total_revenue": report.total_revenue,
            "average_ticket": report.average_ticket,
            "products_sold": len(product_rows),
        },
        "products": product_rows,
        "regions": [{"name": name, "value": value} for name, value in regions.items()],
    }


def format_money(value: Decimal) -> str:
    return f"{value:.2f}"
