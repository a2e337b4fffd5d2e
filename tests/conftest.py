"""
Shared fixtures: a scripted completion port and a one-product store.
"""

from __future__ import annotations

import pytest

from app.application.dto.completion_request import CompletionRequest
from app.application.ports.completion import CompletionPort
from app.application.use_cases.chat_session import ChatSessionUseCase
from app.domain.entities.catalog import CatalogEntry, Store
from app.infrastructure.catalog.memory_catalog import MemoryCatalog
from app.infrastructure.store.memory_store import MemorySessionStore

KOPI_ORDER_REPLY = (
    "Siap kak, ini rinciannya ya, silakan dicek dulu.\n"
    "<<<ORDER_START>>>\n"
    '[{"name":"Kopi Bubuk","qty":2,"price":25000}]\n'
    "<<<ORDER_END>>>"
)


class ScriptedCompletion(CompletionPort):
    """Returns queued replies in order; a queued exception is raised instead."""

    def __init__(self, replies: list[str | Exception] | None = None) -> None:
        self.replies: list[str | Exception] = list(replies or [])
        self.requests: list[CompletionRequest] = []
        self.before_reply = None  # optional hook run inside complete()

    def complete(self, request: CompletionRequest) -> str:
        self.requests.append(request)
        if self.before_reply is not None:
            self.before_reply()
        reply = self.replies.pop(0) if self.replies else "Oke kak."
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def kopi_store() -> Store:
    return Store(
        name="Kopi Curug",
        phone="6281234567892",
        bank="MANDIRI 1111-2222-33",
        products=(CatalogEntry(name="Kopi Bubuk", price=25000, stock=20),),
    )


@pytest.fixture
def catalog(kopi_store) -> MemoryCatalog:
    return MemoryCatalog([kopi_store])


@pytest.fixture
def completion() -> ScriptedCompletion:
    return ScriptedCompletion()


@pytest.fixture
def session_store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def use_case(session_store, catalog, completion) -> ChatSessionUseCase:
    return ChatSessionUseCase(store=session_store, catalog=catalog, completion=completion, history_window=10)
