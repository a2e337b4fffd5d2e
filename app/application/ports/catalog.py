from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.catalog import Store


class CatalogPort(ABC):
    @abstractmethod
    def get_store(self, store_name: str) -> Store | None:
        """Get a store and its products by name (case-insensitive)."""
        raise NotImplementedError

    @abstractmethod
    def list_stores(self) -> list[Store]:
        raise NotImplementedError
