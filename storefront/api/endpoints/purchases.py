from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import StorefrontError
from storefront.db.init_db import get_db
from storefront.schemas.purchase import PurchaseCreate, PurchaseUpdate, PurchaseWithProduct
from storefront.schemas.report import SalesReport
from storefront.services import purchase_service, report_service

router = APIRouter()


@router.post("", response_model=PurchaseWithProduct, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    purchase_in: PurchaseCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Record a purchase. customerId is the customer's email.
    """
    try:
        return await purchase_service.create_purchase(db, purchase_in=purchase_in)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[PurchaseWithProduct])
async def get_purchases(
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get all purchases, most recent first.
    """
    return await purchase_service.get_purchases(db)


# Static paths go before /{purchase_id}


@router.get("/report", response_model=SalesReport)
async def get_sales_report(
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Sales aggregated per product plus overall totals, for the admin dashboard.
    """
    try:
        return await report_service.get_sales_report(db)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/customer/{customer_id}", response_model=List[PurchaseWithProduct])
async def get_customer_purchases(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get all purchases made by a customer, identified by email.
    """
    try:
        return await purchase_service.get_customer_purchases(db, email=customer_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{purchase_id}", response_model=PurchaseWithProduct)
async def get_purchase(
    purchase_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    purchase = await purchase_service.get_purchase(db, purchase_id=purchase_id)
    if not purchase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Purchase not found",
        )
    return purchase


@router.put("/{purchase_id}", response_model=PurchaseWithProduct)
async def update_purchase(
    purchase_id: int,
    purchase_in: PurchaseUpdate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Change a purchase's quantity at its original unit price.
    """
    try:
        return await purchase_service.update_purchase(db, purchase_id=purchase_id, purchase_in=purchase_in)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_purchase(
    purchase_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await purchase_service.delete_purchase(db, purchase_id=purchase_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
