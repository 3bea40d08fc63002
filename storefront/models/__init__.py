# Import all models here to ensure they are registered with SQLAlchemy
from storefront.models.customer import Customer
from storefront.models.product import Product
from storefront.models.purchase import Purchase

__all__ = ["Customer", "Product", "Purchase"]
