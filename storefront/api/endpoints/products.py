from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import StorefrontError
from storefront.db.init_db import get_db
from storefront.schemas.product import Product, ProductCreate, ProductUpdate
from storefront.services import product_service

router = APIRouter()


@router.get("", response_model=List[Product])
async def get_products(
    region: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get all products with optional filtering by region.
    """
    return await product_service.get_products(db, region=region)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Create a new product.
    """
    return await product_service.create_product(db, product_in=product_in)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get a product by ID.
    """
    product = await product_service.get_product(db, product_id=product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Update a product. Purchases already made keep their totals.
    """
    try:
        return await product_service.update_product(db, product_id=product_id, product_in=product_in)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await product_service.delete_product(db, product_id=product_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
