"""
Tests for building the bounded completion request.
"""

from __future__ import annotations

import pytest

from app.application.utils.context_builder import build_completion_request, format_catalog
from app.application.utils.personas import PAYMENT_PROOF_EVENT, PAYMENT_PROOF_TEXT
from app.domain.entities.catalog import CatalogEntry
from app.domain.entities.turn import Turn

CATALOG = [CatalogEntry(name="Kopi Bubuk", price=25000, stock=20), CatalogEntry(name="Gula Aren", price=18000, stock=0)]


def _turns(count: int) -> list[Turn]:
    return [
        Turn(id=str(i), role="user" if i % 2 else "assistant", text=f"pesan {i}", timestamp=float(i))
        for i in range(count)
    ]


def test_catalog_is_listed_with_price_and_stock():
    assert format_catalog(CATALOG) == "- Kopi Bubuk: Rp25000 (Stok: 20)\n- Gula Aren: Rp18000 (Stok: 0)"


@pytest.mark.parametrize("length", [0, 1, 9, 10, 11, 25, 200])
def test_history_never_exceeds_window(length):
    turns = _turns(length)
    request = build_completion_request("instruksi", CATALOG, turns, "halo", window=10)

    assert len(request.history) == min(length, 10)
    assert [h.text for h in request.history] == [t.text for t in turns[-10:]]
    assert request.latest_message == "halo"
    assert request.instruction == "instruksi"


def test_payment_proof_turn_is_replaced_by_sentinel():
    turns = [Turn(id="p", role="user", text=PAYMENT_PROOF_TEXT, timestamp=0.0, is_payment_proof=True)]
    request = build_completion_request("instruksi", CATALOG, turns, "sudah ya kak")

    assert request.history[0].text == PAYMENT_PROOF_EVENT
    assert all(PAYMENT_PROOF_TEXT not in h.text for h in request.history)


def test_assistant_raw_text_is_replayed():
    raw = 'Siap <<<ORDER_START>>>[{"name":"Kopi Bubuk","qty":1,"price":25000}]<<<ORDER_END>>>'
    turns = [Turn(id="a", role="assistant", text="Siap", timestamp=0.0, raw_text=raw)]
    request = build_completion_request("instruksi", CATALOG, turns, "oke")

    assert request.history[0].role == "assistant"
    assert request.history[0].text == raw


def test_window_must_be_positive():
    with pytest.raises(ValueError):
        build_completion_request("instruksi", CATALOG, _turns(3), "halo", window=0)
