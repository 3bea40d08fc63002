from typing import Optional
from datetime import datetime

from pydantic import Field

from storefront.schemas.common import CamelModel, Money, Price


# Shared properties
class ProductBase(CamelModel):
    name: str = Field(..., min_length=1)
    price: Price
    region: str = Field(..., min_length=1)
    description: Optional[str] = None


# Properties to receive via API on creation
class ProductCreate(ProductBase):
    pass


# Properties to receive via API on update
class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Price] = None
    region: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


# Properties to return to client
class Product(ProductBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Projection embedded in a purchase
class ProductSummary(CamelModel):
    id: int
    name: str
    price: Money
    description: Optional[str] = None


# Projection embedded in a sales report row
class ProductReportInfo(CamelModel):
    id: int
    name: str
    price: Money
    region: str
