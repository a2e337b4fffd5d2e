"""
Tests for checking decoded orders against the store catalog.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import OrderRejected
from app.application.utils.order_pricing import PricePolicy, reconcile_with_catalog
from app.domain.entities.order import LineItem, OrderProposal


def _proposal(name: str, price: int, qty: int) -> OrderProposal:
    return OrderProposal.from_items([LineItem(name=name, unit_price=price, quantity=qty)])


def test_catalog_policy_replaces_fabricated_price(kopi_store):
    result = reconcile_with_catalog(_proposal("kopi bubuk", 1000, 2), kopi_store, PricePolicy.catalog)

    assert result.items == (LineItem(name="Kopi Bubuk", unit_price=25000, quantity=2),)
    assert result.total == 50000


def test_catalog_policy_keeps_matching_order(kopi_store):
    proposal = _proposal("Kopi Bubuk", 25000, 2)
    assert reconcile_with_catalog(proposal, kopi_store) == proposal


def test_unknown_product_is_rejected(kopi_store):
    with pytest.raises(OrderRejected):
        reconcile_with_catalog(_proposal("Teh Tarik", 8000, 1), kopi_store, "catalog")


def test_quantity_above_stock_is_rejected(kopi_store):
    with pytest.raises(OrderRejected):
        reconcile_with_catalog(_proposal("Kopi Bubuk", 25000, 21), kopi_store)


def test_strict_policy_rejects_price_difference(kopi_store):
    with pytest.raises(OrderRejected):
        reconcile_with_catalog(_proposal("Kopi Bubuk", 20000, 1), kopi_store, PricePolicy.strict)

    ok = reconcile_with_catalog(_proposal("Kopi Bubuk", 25000, 1), kopi_store, PricePolicy.strict)
    assert ok.total == 25000


def test_trust_policy_accepts_provider_prices(kopi_store):
    proposal = _proposal("Teh Tarik", 8000, 100)
    assert reconcile_with_catalog(proposal, kopi_store, PricePolicy.trust) is proposal


def test_unknown_policy_name_raises(kopi_store):
    with pytest.raises(ValueError):
        reconcile_with_catalog(_proposal("Kopi Bubuk", 25000, 1), kopi_store, "optimistic")
