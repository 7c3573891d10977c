from decimal import Decimal

from app import schemas
from app.services.errors import ProductNotFound


class FakeCatalogClient:
    """Substitui o CatalogClient nos testes, sem chamadas HTTP."""

    def __init__(self):
        self.products = {}
        self.calls = []

    def add_product(self, product_id: str, tenant_id: str, price, currency: str | None = None):
        self.products[(product_id, tenant_id)] = schemas.CatalogProduct(
            product_id=product_id, price=Decimal(str(price)), currency=currency
        )

    def get_product(self, product_id: str, tenant_id: str) -> schemas.CatalogProduct:
        self.calls.append((product_id, tenant_id))
        product = self.products.get((product_id, tenant_id))
        if product is None:
            raise ProductNotFound(product_id)
        return product
