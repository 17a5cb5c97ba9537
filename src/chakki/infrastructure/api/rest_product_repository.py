"""REST-API-backed implementation of ProductRepository."""

from __future__ import annotations

from chakki.domain.exceptions import EntityNotFoundError
from chakki.domain.model.product import Product
from chakki.domain.repository.product_repository import ProductRepository
from chakki.infrastructure.api.client import ApiClient
from chakki.infrastructure.serialization import product_from_raw, product_to_raw

PAGE_SIZE = 100


class RestProductRepository(ProductRepository):

    def __init__(self, client: ApiClient, currency: str = "PKR") -> None:
        self._client = client
        self._currency = currency

    def get_by_id(self, product_id: str) -> Product | None:
        try:
            raw = self._client.get(f"/products/{product_id}")
        except EntityNotFoundError:
            return None
        return product_from_raw(raw, self._currency)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._fetch({"search": name}):
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return self._fetch({})

    def list_active(self) -> list[Product]:
        raw = self._client.get("/products/active")
        return [product_from_raw(item, self._currency) for item in raw]

    def save(self, product: Product) -> Product:
        payload = product_to_raw(product)
        payload.pop("id")
        payload.pop("currency")
        if product.id:
            raw = self._client.put(f"/products/{product.id}", payload)
        else:
            raw = self._client.post("/products", payload)
        return product_from_raw(raw, self._currency)

    def delete(self, product_id: str) -> None:
        self._client.delete(f"/products/{product_id}")

    def _fetch(self, params: dict) -> list[Product]:
        products: list[Product] = []
        page = 1
        while True:
            body = self._client.get(
                "/products", params={**params, "page": page, "page_size": PAGE_SIZE}
            )
            batch = body.get("products", [])
            products.extend(product_from_raw(item, self._currency) for item in batch)
            if not batch or len(products) >= body.get("total", 0):
                return products
            page += 1
