from storefront.client.api import ApiError, StorefrontClient
from storefront.client.session import User, login
from storefront.client.views import ProductCatalog, PurchaseFailed, dashboard_data

__all__ = [
    "ApiError",
    "StorefrontClient",
    "User",
    "login",
    "ProductCatalog",
    "PurchaseFailed",
    "dashboard_data",
]
