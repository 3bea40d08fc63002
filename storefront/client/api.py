"""
HTTP client for the storefront REST API.

Responses are parsed into the same pydantic schemas the server answers with.
"""

from typing import List, Optional
import logging

import httpx

from storefront.schemas.product import Product
from storefront.schemas.purchase import PurchaseWithProduct
from storefront.schemas.report import SalesReport

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class StorefrontClient:
    """Async client; use as ``async with StorefrontClient(url) as client``."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs):
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.warning(f"{method} {url} failed with {response.status_code}: {detail}")
            raise ApiError(response.status_code, str(detail))
        return response.json()

    async def list_products(self) -> List[Product]:
        data = await self._request("GET", "/products")
        return [Product.model_validate(item) for item in data]

    async def create_purchase(self, product_id: int, email: str, quantity: int = 1) -> PurchaseWithProduct:
        data = await self._request(
            "POST",
            "/purchases",
            json={"productId": product_id, "customerId": email, "quantity": quantity},
        )
        return PurchaseWithProduct.model_validate(data)

    async def get_customer_purchases(self, email: str) -> List[PurchaseWithProduct]:
        data = await self._request("GET", f"/purchases/customer/{email}")
        return [PurchaseWithProduct.model_validate(item) for item in data]

    async def get_sales_report(self) -> SalesReport:
        data = await self._request("GET", "/purchases/report")
        return SalesReport.model_validate(data)
