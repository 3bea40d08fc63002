from typing import List

from pydantic import Field

from storefront.schemas.common import CamelModel, Money
from storefront.schemas.product import ProductReportInfo


class ProductSales(CamelModel):
    product_id: int
    total_sales: int = Field(..., alias="total_sales")
    total_revenue: Money = Field(..., alias="total_revenue")
    product: ProductReportInfo


class SalesReport(CamelModel):
    sales_by_product: List[ProductSales]
    average_ticket: Money
    total_purchases: int
    total_revenue: Money
