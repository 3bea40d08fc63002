from fastapi import APIRouter

from storefront.api.endpoints import customers, products, purchases

api_router = APIRouter()

api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(purchases.router, prefix="/purchases", tags=["purchases"])
