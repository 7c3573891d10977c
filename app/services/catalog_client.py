import logging
from decimal import Decimal, InvalidOperation

import httpx

from .. import schemas
from ..core.config import settings
from .errors import ProductNotFound, CatalogUnavailable

logger = logging.getLogger(__name__)


class CatalogClient:
    """Consulta o preço base de um produto no serviço de catálogo."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None, transport: httpx.BaseTransport | None = None):
        self.base_url = (base_url or settings.CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CATALOG_TIMEOUT_SECONDS
        self._transport = transport

    def get_product(self, product_id: str, tenant_id: str) -> schemas.CatalogProduct:
        url = f"{self.base_url}/api/v1/product/{product_id}"
        headers = {"X-Tenant-Id": tenant_id}

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            logger.error("Catalog timeout for product %s (tenant %s): %s", product_id, tenant_id, exc)
            raise CatalogUnavailable(product_id, "catalog timeout") from exc
        except httpx.HTTPError as exc:
            logger.error("Catalog transport error for product %s (tenant %s): %s", product_id, tenant_id, exc)
            raise CatalogUnavailable(product_id, "catalog unavailable") from exc

        if response.status_code == 404:
            raise ProductNotFound(product_id)
        if response.status_code >= 400:
            logger.error("Catalog returned %s for product %s: %s", response.status_code, product_id, response.text)
            raise CatalogUnavailable(product_id, f"catalog returned {response.status_code}")

        return self._parse_product(product_id, response)

    def _parse_product(self, product_id: str, response: httpx.Response) -> schemas.CatalogProduct:
        try:
            body = response.json()
        except ValueError as exc:
            raise CatalogUnavailable(product_id, "invalid catalog response") from exc

        # O catálogo pode responder com o produto direto ou dentro de {"data": {...}}
        data = body.get("data", body) if isinstance(body, dict) else None
        if not data or not isinstance(data, dict) or data.get("price") is None:
            raise ProductNotFound(product_id)

        try:
            price = Decimal(str(data["price"]))
        except InvalidOperation as exc:
            raise CatalogUnavailable(product_id, "invalid price from catalog") from exc
        # NaN, infinito ou negativo: não dá para calcular preço com isso
        if not price.is_finite() or price < 0:
            raise CatalogUnavailable(product_id, "invalid price from catalog")

        return schemas.CatalogProduct(product_id=product_id, price=price, currency=data.get("currency"))


def get_catalog_client() -> CatalogClient:
    return CatalogClient()
