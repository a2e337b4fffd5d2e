from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.order import OrderProposal


class Affordance(str, Enum):
    cart_summary = "cart_summary"
    pending_confirmation = "pending_confirmation"


@dataclass(frozen=True)
class Turn:
    id: str
    role: str  # "user" | "assistant"
    text: str  # transcript text, order block stripped
    timestamp: float
    is_payment_proof: bool = False
    is_fallback: bool = False
    raw_text: str | None = None  # unstripped provider output, replayed as context
    order_proposal: OrderProposal | None = None
    affordance: Affordance | None = None
