import random
import time
import logging
from typing import List, Optional

from storefront.core.errors import ConflictError
from storefront.db.init_db import Database
from storefront.schemas.customer import CustomerCreate
from storefront.schemas.product import ProductCreate
from storefront.schemas.purchase import PurchaseCreate
from storefront.services import customer_service, product_service, purchase_service

logger = logging.getLogger(__name__)

# Constants for data generation
REGIONS = ["North", "South", "East", "West", "Central"]
PRODUCT_NAMES = [
    "Notebook", "Headphones", "Coffee Maker", "Backpack", "Desk Lamp",
    "Running Shoes", "Water Bottle", "Keyboard", "Blender", "Sunglasses",
]
FIRST_NAMES = ["alice", "bruno", "carla", "diego", "elena", "felipe", "gabi", "hugo"]


class DataGenerator:
    """Fill the store with sample customers, products and purchases."""

    def __init__(self, database: Database, seed: Optional[int] = None):
        self.database = database
        self.random = random.Random(seed)
        self.customer_emails: List[str] = []
        self.product_ids: List[int] = []

    async def generate_customers(self, count: int) -> None:
        logger.info(f"Generating {count} customers...")
        start_time = time.time()
        async with self.database.session() as db:
            for i in range(count):
                name = self.random.choice(FIRST_NAMES)
                email = f"{name}{i}@example.com"
                try:
                    await customer_service.create_customer(
                        db,
                        CustomerCreate(email=email, name=name.title(), region=self.random.choice(REGIONS)),
                    )
                except ConflictError:
                    logger.info(f"Customer {email} already exists, reusing it")
                self.customer_emails.append(email)
        logger.info(f"Generated {count} customers in {time.time() - start_time:.2f} seconds")

    async def generate_products(self, count: int) -> None:
        logger.info(f"Generating {count} products...")
        start_time = time.time()
        async with self.database.session() as db:
            for i in range(count):
                base = self.random.choice(PRODUCT_NAMES)
                cents = self.random.randint(500, 50000)
                product = await product_service.create_product(
                    db,
                    ProductCreate(
                        name=f"{base} {i + 1}",
                        price=f"{cents // 100}.{cents % 100:02d}",
                        region=self.random.choice(REGIONS),
                        description=f"Sample {base.lower()}",
                    ),
                )
                self.product_ids.append(product.id)
        logger.info(f"Generated {count} products in {time.time() - start_time:.2f} seconds")

    async def generate_purchases(self, max_per_customer: int) -> int:
        """Each customer buys between 0 and max_per_customer products."""
        if not self.customer_emails or not self.product_ids:
            logger.warning("No customers or products to generate purchases for")
            return 0

        created = 0
        start_time = time.time()
        for email in self.customer_emails:
            for _ in range(self.random.randint(0, max_per_customer)):
                # One session per purchase, each purchase owns its transaction
                async with self.database.session() as db:
                    await purchase_service.create_purchase(
                        db,
                        PurchaseCreate(
                            product_id=self.random.choice(self.product_ids),
                            customer_id=email,
                            quantity=self.random.randint(1, 3),
                        ),
                    )
                created += 1
        logger.info(f"Generated {created} purchases in {time.time() - start_time:.2f} seconds")
        return created
