from typing import List, Optional
import logging

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.core.errors import ConflictError, NotFoundError
from storefront.models.customer import Customer
from storefront.models.purchase import Purchase
from storefront.schemas.customer import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> Optional[str]:
    """
    Normalise an address the way the request schemas do, so stored emails
    and lookup keys always agree. Returns None for anything that is not an
    email address.
    """
    try:
        return _email_adapter.validate_python(email.strip())
    except PydanticValidationError:
        return None


async def create_customer(db: AsyncSession, customer_in: CustomerCreate) -> Customer:
    """
    Create a new customer. Emails are unique.
    """
    if await get_customer_by_email(db, customer_in.email):
        await db.rollback()
        raise ConflictError("A customer with this email already exists.")

    db_customer = Customer(
        email=customer_in.email,
        name=customer_in.name,
        region=customer_in.region,
    )
    db.add(db_customer)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with another request creating the same email
        await db.rollback()
        logger.warning(f"Duplicate customer email rejected: {customer_in.email}")
        raise ConflictError("A customer with this email already exists.")
    await db.refresh(db_customer)
    return db_customer


async def get_customer(db: AsyncSession, customer_id: int) -> Optional[Customer]:
    """
    Get a customer by internal ID.
    """
    result = await db.execute(select(Customer).filter(Customer.id == customer_id))
    return result.scalars().first()


async def get_customer_by_email(db: AsyncSession, email: str) -> Optional[Customer]:
    """
    Get a customer by email, the key clients use to refer to customers.
    """
    email = normalize_email(email)
    if email is None:
        return None
    result = await db.execute(select(Customer).filter(Customer.email == email))
    return result.scalars().first()


async def get_customers(db: AsyncSession) -> List[Customer]:
    result = await db.execute(select(Customer).order_by(Customer.id))
    return result.scalars().all()


async def update_customer(db: AsyncSession, customer_id: int, customer_in: CustomerUpdate) -> Customer:
    db_customer = await get_customer(db, customer_id)
    if not db_customer:
        raise NotFoundError("Customer", customer_id)

    changes = customer_in.model_dump(exclude_unset=True, exclude_none=True)
    new_email = changes.get("email")
    if new_email and new_email != db_customer.email:
        if await get_customer_by_email(db, new_email):
            await db.rollback()
            raise ConflictError("A customer with this email already exists.")

    for field, value in changes.items():
        setattr(db_customer, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("A customer with this email already exists.")
    await db.refresh(db_customer)
    return db_customer


async def delete_customer(db: AsyncSession, customer_id: int) -> None:
    """
    Delete a customer. Customers referenced by a purchase are never deleted.
    """
    db_customer = await get_customer(db, customer_id)
    if not db_customer:
        raise NotFoundError("Customer", customer_id)

    result = await db.execute(
        select(func.count(Purchase.id)).filter(Purchase.customer_id == customer_id)
    )
    if result.scalar():
        await db.rollback()
        raise ConflictError("Customer has purchases and cannot be deleted")

    await db.delete(db_customer)
    await db.commit()
