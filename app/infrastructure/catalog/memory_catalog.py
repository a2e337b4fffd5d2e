from __future__ import annotations

import json
from pathlib import Path

from app.application.ports.catalog import CatalogPort
from app.domain.entities.catalog import CatalogEntry, Store
from app.infrastructure.catalog.catalog_data import STORES


class MemoryCatalog(CatalogPort):
    def __init__(self, stores: dict[str, Store] | list[Store] | None = None) -> None:
        if isinstance(stores, list):
            stores = {s.name.lower().strip(): s for s in stores}
        self._stores = STORES if stores is None else stores

    @classmethod
    def from_json_file(cls, path: str | Path) -> "MemoryCatalog":
        """
        Load stores from a JSON file shaped like:
          [{"name": "...", "phone": "...", "bank": "...",
            "products": [{"name": "...", "price": 1000, "stock": 3}]}]
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        stores = [
            Store(
                name=item["name"],
                phone=item.get("phone", ""),
                bank=item.get("bank", "COD ONLY"),
                products=tuple(
                    CatalogEntry(name=p["name"], price=int(p["price"]), stock=int(p.get("stock", 0)))
                    for p in item.get("products", [])
                ),
            )
            for item in data
        ]
        return cls(stores)

    def get_store(self, store_name: str) -> Store | None:
        return self._stores.get(store_name.lower().strip())

    def list_stores(self) -> list[Store]:
        return list(self._stores.values())
