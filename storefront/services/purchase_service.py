from typing import List, Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from storefront.core.errors import NotFoundError, StorefrontError, TransactionError, ValidationError
from storefront.models.product import Product
from storefront.models.purchase import Purchase
from storefront.schemas.purchase import PurchaseCreate, PurchaseUpdate
from storefront.services import customer_service
from storefront.utils.money import line_total, to_cents

logger = logging.getLogger(__name__)


def _with_product(stmt):
    # populate_existing so rows already in the identity map pick up
    # server-side defaults and the joined product
    return stmt.options(joinedload(Purchase.product)).execution_options(populate_existing=True)


async def _lock_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    """
    Read a product and hold its row until the surrounding transaction ends.
    Dialects without FOR UPDATE (SQLite) simply read it.
    """
    result = await db.execute(
        select(Product).filter(Product.id == product_id).with_for_update()
    )
    return result.scalars().first()


async def create_purchase(db: AsyncSession, purchase_in: PurchaseCreate) -> Purchase:
    """
    Record a purchase as one all-or-nothing unit of work.

    The product and the customer (looked up by email) must both exist; the
    total is snapshotted as product.price * quantity and the stored row is
    returned joined with its product. Any failure rolls the transaction back
    before the error leaves this function, so no row is ever written on a
    failed attempt. The session must not already be inside a transaction.
    """
    if purchase_in.quantity is None or purchase_in.quantity < 1:
        raise ValidationError("quantity must be a positive integer")

    logger.info(
        f"Creating purchase: product={purchase_in.product_id} "
        f"customer={purchase_in.customer_id} quantity={purchase_in.quantity}"
    )
    try:
        # Commits on normal exit, rolls back on any exception (cancellation included)
        async with db.begin():
            product = await _lock_product(db, purchase_in.product_id)
            if not product:
                logger.warning(f"Purchase aborted, product {purchase_in.product_id} not found")
                raise NotFoundError("Product", purchase_in.product_id)

            customer = await customer_service.get_customer_by_email(db, purchase_in.customer_id)
            if not customer:
                logger.warning(f"Purchase aborted, customer {purchase_in.customer_id} not found")
                raise NotFoundError("Customer", purchase_in.customer_id)

            db_purchase = Purchase(
                product_id=product.id,
                customer_id=customer.id,
                quantity=purchase_in.quantity,
                total_price=line_total(product.price, purchase_in.quantity),
            )
            db.add(db_purchase)
            await db.flush()

            result = await db.execute(
                _with_product(select(Purchase).filter(Purchase.id == db_purchase.id))
            )
            purchase = result.scalars().one()
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Purchase transaction rolled back: {e}")
        raise TransactionError(str(e)) from e

    logger.info(f"Purchase {purchase.id} committed, total {purchase.total_price}")
    return purchase


async def get_customer_purchases(db: AsyncSession, email: str) -> List[Purchase]:
    """
    Get all purchases of the customer with this email, most recent first.
    """
    customer = await customer_service.get_customer_by_email(db, email)
    if not customer:
        raise NotFoundError("Customer", email)

    result = await db.execute(
        _with_product(
            select(Purchase)
            .filter(Purchase.customer_id == customer.id)
            .order_by(Purchase.created_at.desc(), Purchase.id.desc())
        )
    )
    return result.scalars().all()


async def get_purchases(db: AsyncSession) -> List[Purchase]:
    """
    Get every purchase, most recent first.
    """
    result = await db.execute(
        _with_product(select(Purchase).order_by(Purchase.created_at.desc(), Purchase.id.desc()))
    )
    return result.scalars().all()


async def get_purchase(db: AsyncSession, purchase_id: int) -> Optional[Purchase]:
    """
    Get a purchase by ID, joined with its product.
    """
    result = await db.execute(_with_product(select(Purchase).filter(Purchase.id == purchase_id)))
    return result.scalars().first()


async def update_purchase(db: AsyncSession, purchase_id: int, purchase_in: PurchaseUpdate) -> Purchase:
    """
    Change the quantity of a purchase.

    The new total uses the unit price the purchase was made at, not the
    product's current price.
    """
    db_purchase = await get_purchase(db, purchase_id)
    if not db_purchase:
        raise NotFoundError("Purchase", purchase_id)

    unit_price = to_cents(db_purchase.total_price) / db_purchase.quantity
    db_purchase.quantity = purchase_in.quantity
    db_purchase.total_price = line_total(unit_price, purchase_in.quantity)
    await db.commit()

    return await get_purchase(db, purchase_id)


async def delete_purchase(db: AsyncSession, purchase_id: int) -> None:
    db_purchase = await get_purchase(db, purchase_id)
    if not db_purchase:
        raise NotFoundError("Purchase", purchase_id)

    await db.delete(db_purchase)
    await db.commit()
