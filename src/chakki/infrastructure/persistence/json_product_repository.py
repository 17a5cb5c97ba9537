"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from pathlib import Path

from chakki.domain.exceptions import EntityNotFoundError
from chakki.domain.model.product import Product
from chakki.domain.repository.product_repository import ProductRepository
from chakki.infrastructure.serialization import product_from_raw, product_to_raw


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, currency: str = "PKR") -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> Product:
        products = self._load()
        if not product.id:
            product.id = self._next_id(products)
        products[product.id] = product
        self._persist(products)
        return product

    def delete(self, product_id: str) -> None:
        products = self._load()
        if products.pop(product_id, None) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _next_id(products: dict[str, Product]) -> str:
        numeric = [int(pid) for pid in products if pid.isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            str(item["id"]): product_from_raw(item, self._currency) for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [product_to_raw(p) for p in products.values()]
        self._file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
