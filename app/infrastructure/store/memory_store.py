from __future__ import annotations

from app.application.ports.session_store import SessionStorePort
from app.domain.entities.chat_session import ChatSession


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, ChatSession] = {}

    def get(self, session_id: str) -> ChatSession | None:
        return self._sessions.get(session_id)

    def save(self, session: ChatSession) -> None:
        self._sessions[session.id] = session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None
