from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from app.application.ports.session_store import SessionStorePort
from app.domain.entities.chat_session import ChatKind, ChatSession, ChatState
from app.domain.entities.order import LineItem, OrderProposal
from app.domain.entities.turn import Affordance, Turn

logger = logging.getLogger(__name__)


class JsonSessionStore(SessionStorePort):
    """One JSON file per chat session; kept for audit of the turn history."""

    def __init__(self, data_dir: str = "./data/sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def _get_lock(self, session_id: str) -> threading.Lock:
        """Get or create a lock for a session_id."""
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        # ids come from uuid4().hex; anything else must not escape the data dir
        safe_id = "".join(c for c in session_id if c.isalnum() or c in "-_")
        return self._data_dir / f"{safe_id}.json"

    def get(self, session_id: str) -> ChatSession | None:
        file_path = self._get_file_path(session_id)
        with self._get_lock(session_id):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Unreadable session file", extra={"session_id": session_id, "error": str(e)})
                return None
        return self._deserialize_session(data)

    def save(self, session: ChatSession) -> None:
        """Save session to JSON file atomically."""
        file_path = self._get_file_path(session.id)
        temp_path = file_path.with_suffix(".json.tmp")
        data = self._serialize_session(session)

        with self._get_lock(session.id):
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise

    def delete(self, session_id: str) -> bool:
        file_path = self._get_file_path(session_id)
        with self._get_lock(session_id):
            if not file_path.exists():
                return False
            file_path.unlink()
            return True

    def _serialize_session(self, session: ChatSession) -> dict[str, Any]:
        return {
            "id": session.id,
            "kind": session.kind.value,
            "store_name": session.store_name,
            "state": session.state.value,
            "active_proposal": self._serialize_proposal(session.active_proposal),
            "in_flight": session.in_flight,
            "epoch": session.epoch,
            "created_at": session.created_at,
            "updated_at": session.updated_at,
            "turns": [self._serialize_turn(t) for t in session.turns],
            "version": 1,
        }

    def _deserialize_session(self, data: dict[str, Any]) -> ChatSession:
        return ChatSession(
            id=data["id"],
            kind=ChatKind(data.get("kind", ChatKind.store.value)),
            store_name=data.get("store_name"),
            turns=tuple(self._deserialize_turn(t) for t in data.get("turns", [])),
            state=ChatState(data.get("state", ChatState.browsing.value)),
            active_proposal=self._deserialize_proposal(data.get("active_proposal")),
            in_flight=data.get("in_flight", False),
            epoch=data.get("epoch", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def _serialize_turn(self, turn: Turn) -> dict[str, Any]:
        return {
            "id": turn.id,
            "role": turn.role,
            "text": turn.text,
            "ts": turn.timestamp,
            "is_payment_proof": turn.is_payment_proof,
            "is_fallback": turn.is_fallback,
            "raw_text": turn.raw_text,
            "order_proposal": self._serialize_proposal(turn.order_proposal),
            "affordance": turn.affordance.value if turn.affordance else None,
        }

    def _deserialize_turn(self, data: dict[str, Any]) -> Turn:
        affordance = data.get("affordance")
        return Turn(
            id=data["id"],
            role=data["role"],
            text=data.get("text", ""),
            timestamp=data.get("ts", 0.0),
            is_payment_proof=data.get("is_payment_proof", False),
            is_fallback=data.get("is_fallback", False),
            raw_text=data.get("raw_text"),
            order_proposal=self._deserialize_proposal(data.get("order_proposal")),
            affordance=Affordance(affordance) if affordance else None,
        )

    def _serialize_proposal(self, proposal: OrderProposal | None) -> dict[str, Any] | None:
        if proposal is None:
            return None
        return {
            "items": [
                {"name": i.name, "unit_price": i.unit_price, "quantity": i.quantity}
                for i in proposal.items
            ],
            "total": proposal.total,
        }

    def _deserialize_proposal(self, data: dict[str, Any] | None) -> OrderProposal | None:
        if not data:
            return None
        items = tuple(
            LineItem(name=i["name"], unit_price=i["unit_price"], quantity=i["quantity"])
            for i in data.get("items", [])
        )
        # total is re-checked against the lines on load
        return OrderProposal(items=items, total=data["total"])
