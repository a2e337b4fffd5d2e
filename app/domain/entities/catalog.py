from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    price: int  # IDR, integer units
    stock: int


@dataclass(frozen=True)
class Store:
    name: str
    phone: str = ""
    bank: str = "COD ONLY"  # e.g. "BRI 1234-5678-90"
    products: tuple[CatalogEntry, ...] = ()

    @property
    def is_cod_only(self) -> bool:
        return self.bank.strip().upper() == "COD ONLY"

    def find_product(self, name: str) -> CatalogEntry | None:
        wanted = (name or "").strip().lower()
        for entry in self.products:
            if entry.name.strip().lower() == wanted:
                return entry
        return None
