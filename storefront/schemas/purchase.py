from typing import Optional
from datetime import datetime

from pydantic import EmailStr, Field

from storefront.schemas.common import CamelModel, Money
from storefront.schemas.product import ProductSummary


# Properties to receive via API on creation.
# customerId carries the customer's email, not the internal id.
class PurchaseCreate(CamelModel):
    product_id: int
    customer_id: EmailStr
    quantity: int = Field(1, ge=1, strict=True)


# Properties to receive via API on update
class PurchaseUpdate(CamelModel):
    quantity: int = Field(..., ge=1, strict=True)


# Properties to return to client
class Purchase(CamelModel):
    id: int
    product_id: int
    customer_id: int
    quantity: int
    total_price: Money
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Purchase joined with its product
class PurchaseWithProduct(Purchase):
    product: ProductSummary
