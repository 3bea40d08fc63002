"""
Shared fixtures.

Every test gets its own SQLite database file, a store handle pointing at
it, and an application wired to that handle.
"""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func
from sqlalchemy.future import select

from storefront.core.config import Settings
from storefront.db.init_db import Database, init_db
from storefront.main import create_app
from storefront.models.purchase import Purchase
from storefront.schemas.customer import CustomerCreate
from storefront.schemas.product import ProductCreate
from storefront.services import customer_service, product_service


@pytest.fixture
async def database(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}")
    await init_db(database)
    yield database
    await database.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database):
    return create_app(Settings(DATABASE_URL=database.url), database=database)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def catalog(database):
    """A product priced 10.00, one priced 2.50 and two customers."""
    async with database.session() as db:
        p1 = await product_service.create_product(
            db, ProductCreate(name="P1", price=Decimal("10.00"), region="North", description="First")
        )
        p2 = await product_service.create_product(
            db, ProductCreate(name="P2", price=Decimal("2.50"), region="South")
        )
        alice = await customer_service.create_customer(
            db, CustomerCreate(email="alice@example.com", name="Alice", region="North")
        )
        bob = await customer_service.create_customer(
            db, CustomerCreate(email="bob@example.com", name="Bob", region="South")
        )
    return {"p1": p1, "p2": p2, "alice": alice, "bob": bob}


@pytest.fixture
def purchase_count(database):
    """Number of purchase rows currently committed."""

    async def count() -> int:
        async with database.session() as db:
            result = await db.execute(select(func.count(Purchase.id)))
            return result.scalar()

    return count


