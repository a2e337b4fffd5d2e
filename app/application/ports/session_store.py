from abc import ABC, abstractmethod

from app.domain.entities.chat_session import ChatSession


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> ChatSession | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: ChatSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Delete a session. Returns False if it did not exist."""
        raise NotImplementedError
