from decimal import Decimal
from typing import Any, Dict
import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.errors import AggregationError
from storefront.models.product import Product
from storefront.models.purchase import Purchase
from storefront.utils.money import to_cents

logger = logging.getLogger(__name__)


async def get_sales_report(db: AsyncSession) -> Dict[str, Any]:
    """
    Aggregate all purchases for the admin dashboard.

    Everything comes out of one grouped query, so the per-product rows and
    the overall totals always describe the same snapshot. With no purchases
    every figure is zero and salesByProduct is empty.
    """
    total_sales = func.sum(Purchase.quantity)
    stmt = (
        select(
            Product.id,
            Product.name,
            Product.price,
            Product.region,
            total_sales.label("total_sales"),
            func.sum(Purchase.total_price).label("total_revenue"),
            func.count(Purchase.id).label("purchase_count"),
        )
        .join(Purchase, Purchase.product_id == Product.id)
        .group_by(Product.id, Product.name, Product.price, Product.region)
        .order_by(total_sales.desc(), Product.id)
    )

    try:
        result = await db.execute(stmt)
        rows = result.all()
    except Exception as e:
        logger.error(f"Error computing sales report: {e}")
        raise AggregationError(f"Could not compute sales report: {e}") from e

    sales_by_product = []
    total_purchases = 0
    total_revenue = Decimal("0.00")
    for row in rows:
        revenue = to_cents(row.total_revenue)
        sales_by_product.append({
            "product_id": row.id,
            "total_sales": int(row.total_sales),
            "total_revenue": revenue,
            "product": {
                "id": row.id,
                "name": row.name,
                "price": to_cents(row.price),
                "region": row.region,
            },
        })
        total_purchases += row.purchase_count
        total_revenue += revenue

    average_ticket = to_cents(total_revenue / total_purchases) if total_purchases else Decimal("0.00")

    logger.info(f"Sales report: {total_purchases} purchases, revenue {total_revenue}")
    return {
        "sales_by_product": sales_by_product,
        "average_ticket": average_ticket,
        "total_purchases": total_purchases,
        "total_revenue": to_cents(total_revenue),
    }
