"""Abstract repository for the Product aggregate (the catalog).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, REST API) live in
the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from chakki.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product and return the stored record.

        A product saved with an empty ``id`` is new; the repository
        assigns the identifier.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Raises EntityNotFoundError if absent."""

    def list_active(self) -> list[Product]:
        """Return the sellable products with their current stock and price."""
        return [p for p in self.list_all() if p.is_active]
