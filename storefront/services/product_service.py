from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.errors import ConflictError, NotFoundError
from storefront.models.product import Product
from storefront.models.purchase import Purchase
from storefront.schemas.product import ProductCreate, ProductUpdate


async def create_product(db: AsyncSession, product_in: ProductCreate) -> Product:
    """
    Create a new product.
    """
    db_product = Product(
        name=product_in.name,
        price=product_in.price,
        region=product_in.region,
        description=product_in.description,
    )
    db.add(db_product)
    await db.commit()
    await db.refresh(db_product)
    return db_product


async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    """
    Get a product by ID.
    """
    result = await db.execute(select(Product).filter(Product.id == product_id))
    return result.scalars().first()


async def get_products(db: AsyncSession, region: Optional[str] = None) -> List[Product]:
    """
    Get all products, optionally restricted to one region.
    """
    stmt = select(Product).order_by(Product.id)
    if region:
        stmt = stmt.filter(Product.region == region)
    result = await db.execute(stmt)
    return result.scalars().all()


async def update_product(db: AsyncSession, product_id: int, product_in: ProductUpdate) -> Product:
    """
    Update a product. Existing purchases keep the total they were created with.
    """
    db_product = await get_product(db, product_id)
    if not db_product:
        raise NotFoundError("Product", product_id)

    for field, value in product_in.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(db_product, field, value)

    await db.commit()
    await db.refresh(db_product)
    return db_product


async def delete_product(db: AsyncSession, product_id: int) -> None:
    """
    Delete a product that no purchase references.
    """
    db_product = await get_product(db, product_id)
    if not db_product:
        raise NotFoundError("Product", product_id)

    result = await db.execute(
        select(func.count(Purchase.id)).filter(Purchase.product_id == product_id)
    )
    if result.scalar():
        await db.rollback()
        raise ConflictError("Product has purchases and cannot be deleted")

    await db.delete(db_product)
    await db.commit()
