from __future__ import annotations

from app.application.dto.completion_request import CompletionRequest, HistoryMessage
from app.application.utils.personas import PAYMENT_PROOF_EVENT
from app.domain.entities.catalog import CatalogEntry
from app.domain.entities.turn import Turn


def format_catalog(catalog: list[CatalogEntry] | tuple[CatalogEntry, ...]) -> str:
    return "\n".join(f"- {entry.name}: Rp{entry.price} (Stok: {entry.stock})" for entry in catalog)


def history_text(turn: Turn) -> str:
    """Text a turn contributes to the model context."""
    if turn.is_payment_proof:
        # no image content is ever transmitted
        return PAYMENT_PROOF_EVENT
    if turn.role == "assistant" and turn.raw_text:
        return turn.raw_text
    return turn.text


def build_completion_request(
    instruction: str,
    catalog: list[CatalogEntry] | tuple[CatalogEntry, ...],
    turns: list[Turn] | tuple[Turn, ...],
    latest_text: str,
    window: int = 10,
) -> CompletionRequest:
    """
    Assemble the bounded input of one completion call.

    `turns` is the history preceding the latest user message; only the last
    `window` of them are included, whatever the session length.
    """
    if window < 1:
        raise ValueError("History window must be >= 1.")

    recent = list(turns)[-window:]
    history = tuple(HistoryMessage(role=t.role, text=history_text(t)) for t in recent)

    return CompletionRequest(
        instruction=instruction,
        catalog_text=format_catalog(catalog),
        history=history,
        latest_message=latest_text,
    )
