from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.order import OrderProposal
from app.domain.entities.turn import Turn


class ChatKind(str, Enum):
    store = "store"
    village = "village"


class ChatState(str, Enum):
    browsing = "browsing"
    order_proposed = "order_proposed"
    proof_submitted = "proof_submitted"
    awaiting_manual_confirmation = "awaiting_manual_confirmation"


@dataclass(frozen=True)
class ChatSession:
    id: str
    kind: ChatKind = ChatKind.store
    store_name: str | None = None
    turns: tuple[Turn, ...] = ()
    state: ChatState = ChatState.browsing
    active_proposal: OrderProposal | None = None
    in_flight: bool = False
    epoch: int = 0  # bumped on clear; completions started under an older epoch are dropped
    created_at: float | None = None
    updated_at: float | None = None
