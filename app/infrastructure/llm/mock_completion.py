from __future__ import annotations

import json
import re

from app.application.dto.completion_request import CompletionRequest
from app.application.ports.completion import CompletionPort
from app.application.utils.personas import ORDER_END, ORDER_START

_CATALOG_LINE = re.compile(r"^- (?P<name>.+): Rp(?P<price>\d+) \(Stok: (?P<stock>\d+)\)$")
_PURCHASE_WORDS = ("beli", "pesan", "bungkus", "mau dong", "order")


class MockCompletion(CompletionPort):
    """Deterministic keyword-driven replies for local runs without an API key."""

    def complete(self, request: CompletionRequest) -> str:
        normalized = request.latest_message.lower()
        products = _parse_catalog(request.catalog_text)
        if not products:
            return (
                "Untuk layanan surat (KTP, KK, Domisili, SKCK) bisa diajukan online lewat menu "
                "Layanan Desa, tidak perlu antri. Untuk belanja, silakan buka Pasar Desa ya."
            )

        product = _match_product(normalized, products)
        if product is None:
            names = ", ".join(p["name"] for p in products)
            return f"Boleh kak, silakan dipilih. Yang ready sekarang: {names}."

        if any(word in normalized for word in _PURCHASE_WORDS):
            qty_match = re.search(r"\d+", normalized)
            qty = int(qty_match.group()) if qty_match else 1
            block = json.dumps([{"name": product["name"], "qty": qty, "price": product["price"]}])
            return f"Siap kak, ini rinciannya ya, silakan dicek dulu.\n{ORDER_START}\n{block}\n{ORDER_END}"

        return f"{product['name']} harganya Rp{product['price']} kak, stok masih {product['stock']}."


def _parse_catalog(catalog_text: str) -> list[dict]:
    products = []
    for line in (catalog_text or "").splitlines():
        m = _CATALOG_LINE.match(line.strip())
        if m:
            products.append({"name": m.group("name"), "price": int(m.group("price")), "stock": int(m.group("stock"))})
    return products


def _match_product(normalized: str, products: list[dict]) -> dict | None:
    for product in products:
        if product["name"].lower() in normalized:
            return product
    for product in products:
        words = [w for w in product["name"].lower().split() if len(w) >= 4]
        if any(w in normalized for w in words):
            return product
    return None
