from __future__ import annotations

from enum import Enum

from app.application.exceptions import OrderRejected
from app.domain.entities.catalog import Store
from app.domain.entities.order import LineItem, OrderProposal


class PricePolicy(str, Enum):
    catalog = "catalog"  # catalog price wins, total recomputed
    strict = "strict"  # any price difference rejects the order
    trust = "trust"  # accept provider prices as decoded


def reconcile_with_catalog(
    proposal: OrderProposal,
    store: Store,
    policy: PricePolicy | str = PricePolicy.catalog,
) -> OrderProposal:
    """
    Check a decoded proposal against the store catalog.

    Returns a new proposal (the input is never mutated). Raises OrderRejected
    when a line names an unknown product, asks for more than the stock, or,
    under the strict policy, quotes a price that differs from the catalog.
    """
    policy = PricePolicy(policy)
    if policy is PricePolicy.trust:
        return proposal

    items: list[LineItem] = []
    for line in proposal.items:
        entry = store.find_product(line.name)
        if entry is None:
            raise OrderRejected(f"Product not in catalog: {line.name!r}")
        if line.quantity > entry.stock:
            raise OrderRejected(
                f"Quantity {line.quantity} for {entry.name!r} exceeds stock {entry.stock}"
            )
        if policy is PricePolicy.strict and line.unit_price != entry.price:
            raise OrderRejected(
                f"Price {line.unit_price} for {entry.name!r} differs from catalog price {entry.price}"
            )
        items.append(LineItem(name=entry.name, unit_price=entry.price, quantity=line.quantity))

    return OrderProposal.from_items(items)
