from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryMessage:
    role: str  # "user" | "assistant"
    text: str


@dataclass(frozen=True)
class CompletionRequest:
    instruction: str
    catalog_text: str
    history: tuple[HistoryMessage, ...]
    latest_message: str
