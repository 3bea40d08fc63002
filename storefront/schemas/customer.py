from typing import Optional
from datetime import datetime

from pydantic import EmailStr, Field

from storefront.schemas.common import CamelModel


# Shared properties
class CustomerBase(CamelModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)


# Properties to receive via API on creation
class CustomerCreate(CustomerBase):
    pass


# Properties to receive via API on update
class CustomerUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1)
    region: Optional[str] = Field(None, min_length=1)


# Properties to return to client
class Customer(CustomerBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
