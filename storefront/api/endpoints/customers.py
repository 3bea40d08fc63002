from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import StorefrontError
from storefront.db.init_db import get_db
from storefront.schemas.customer import Customer, CustomerCreate, CustomerUpdate
from storefront.services import customer_service

router = APIRouter()


@router.get("", response_model=List[Customer])
async def get_customers(
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get all customers.
    """
    return await customer_service.get_customers(db)


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Create a new customer.
    """
    try:
        return await customer_service.create_customer(db, customer_in=customer_in)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{customer_id}", response_model=Customer)
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get a customer by ID.
    """
    customer = await customer_service.get_customer(db, customer_id=customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return customer


@router.put("/{customer_id}", response_model=Customer)
async def update_customer(
    customer_id: int,
    customer_in: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    try:
        return await customer_service.update_customer(db, customer_id=customer_id, customer_in=customer_in)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Delete a customer that has no purchases.
    """
    try:
        await customer_service.delete_customer(db, customer_id=customer_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
