from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from app.application.exceptions import InconsistentOrderTotal, MalformedOrderPayload
from app.application.utils.personas import ORDER_END, ORDER_START
from app.domain.entities.order import LineItem, OrderProposal

logger = logging.getLogger(__name__)


class OrderLinePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(min_length=1)
    qty: StrictInt = Field(ge=1)
    price: StrictInt = Field(ge=0)


class OrderPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: list[OrderLinePayload] = Field(min_length=1)
    total: StrictInt | None = None


@dataclass(frozen=True)
class ParsedResponse:
    display_text: str
    proposal: OrderProposal | None = None
    rejection_reason: str | None = None


def find_order_block(text: str) -> tuple[int, int, str] | None:
    """Return (start, stop, payload) of the first complete marker pair, or None."""
    start = text.find(ORDER_START)
    if start == -1:
        return None
    payload_start = start + len(ORDER_START)
    end = text.find(ORDER_END, payload_start)
    if end == -1:
        return None
    return start, end + len(ORDER_END), text[payload_start:end]


def decode_order_payload(payload: str) -> OrderProposal:
    """
    Decode the span between the markers.

    Accepts either a JSON array of {"name", "qty", "price"} objects or an
    object {"items": [...], "total": N}. A stated total must equal the sum of
    the lines.
    """
    try:
        data = json.loads(payload.strip())
    except (ValueError, RecursionError) as e:  # deep nesting raises RecursionError
        snippet = payload.strip()[:80].replace("\n", " ")
        raise MalformedOrderPayload(f"Order block is not valid JSON. Snippet: {snippet!r}") from e

    if isinstance(data, list):
        data = {"items": data}

    try:
        order = OrderPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedOrderPayload(f"Order block has the wrong shape: {e.error_count()} error(s).") from e

    items = tuple(
        LineItem(name=line.name.strip(), unit_price=line.price, quantity=line.qty)
        for line in order.items
    )
    if order.total is None:
        return OrderProposal.from_items(items)
    return OrderProposal(items=items, total=order.total)


def parse_response(raw: str) -> ParsedResponse:
    block = find_order_block(raw)
    if block is None:
        return ParsedResponse(display_text=raw)

    start, stop, payload = block
    display_text = (raw[:start] + raw[stop:]).strip()

    if find_order_block(raw[stop:]) is not None:
        logger.warning("Multiple order blocks in one response, only the first is used")

    try:
        proposal = decode_order_payload(payload)
    except (MalformedOrderPayload, InconsistentOrderTotal) as e:
        logger.warning("Order block ignored", extra={"reason": str(e)})
        return ParsedResponse(display_text=display_text, rejection_reason=str(e))

    return ParsedResponse(display_text=display_text, proposal=proposal)
