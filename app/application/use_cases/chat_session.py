from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, replace

from app.application.dto.completion_request import CompletionRequest
from app.application.exceptions import (
    CompletionContractError,
    CompletionTransportError,
    EmptyUserInput,
    OrderRejected,
    SessionBusy,
    SessionNotFound,
    StoreNotFound,
)
from app.application.ports.catalog import CatalogPort
from app.application.ports.completion import CompletionPort
from app.application.ports.session_store import SessionStorePort
from app.application.utils.context_builder import build_completion_request
from app.application.utils.order_parser import parse_response
from app.application.utils.order_pricing import PricePolicy, reconcile_with_catalog
from app.application.utils.personas import (
    PAYMENT_ACK_TEXT,
    PAYMENT_PROOF_TEXT,
    Persona,
    build_payment_instruction,
    store_persona,
    village_persona,
)
from app.application.utils.state_machine import (
    append_turn,
    on_acknowledgment,
    on_assistant_reply,
    on_payment_proof,
    reset_session,
)
from app.domain.entities.catalog import Store
from app.domain.entities.chat_session import ChatKind, ChatSession
from app.domain.entities.turn import Affordance, Turn


@dataclass(frozen=True)
class TurnResult:
    session: ChatSession | None  # None when the session was closed mid-flight
    turns: tuple[Turn, ...]
    discarded: bool = False
    payment_instruction: str | None = None


class ChatSessionUseCase:
    def __init__(
        self,
        store: SessionStorePort,
        catalog: CatalogPort,
        completion: CompletionPort,
        history_window: int = 10,
        price_policy: PricePolicy | str = PricePolicy.catalog,
        village_name: str = "Curug Badak",
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._completion = completion
        self._history_window = history_window
        self._price_policy = PricePolicy(price_policy)
        self._village_name = village_name
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def open_session(self, kind: ChatKind | str, store_name: str | None = None) -> ChatSession:
        kind = ChatKind(kind)
        store: Store | None = None
        if kind is ChatKind.store:
            store = self._load_store(store_name)
        persona = self._persona(kind, store)

        now = time.time()
        session = ChatSession(
            id=uuid.uuid4().hex,
            kind=kind,
            store_name=store.name if store else None,
            created_at=now,
            updated_at=now,
        )
        session = append_turn(session, _new_turn("assistant", persona.greeting))
        self._store.save(session)
        self._logger.info("Chat session opened", extra={"session_id": session.id, "store": session.store_name})
        return session

    def get_session(self, session_id: str) -> ChatSession:
        session = self._store.get(session_id)
        if session is None:
            raise SessionNotFound(f"Unknown chat session: {session_id}")
        return session

    def send_message(self, session_id: str, text: str) -> TurnResult:
        if not text or not text.strip():
            raise EmptyUserInput("Message text must not be blank.")

        with self._get_lock(session_id):
            session = self.get_session(session_id)
            if session.in_flight:
                raise SessionBusy("A reply is still being generated for this session.")

            store = self._load_store(session.store_name) if session.kind is ChatKind.store else None
            persona = self._persona(session.kind, store)
            request = build_completion_request(
                instruction=persona.instruction,
                catalog=store.products if store else (),
                turns=session.turns,
                latest_text=text,
                window=self._history_window,
            )
            user_turn = _new_turn("user", text)
            session = replace(append_turn(session, user_turn), in_flight=True, updated_at=time.time())
            self._store.save(session)
            epoch = session.epoch

        raw, fallback_text = self._complete(request, persona, session_id)

        with self._get_lock(session_id):
            current = self._store.get(session_id)
            if current is None or current.epoch != epoch:
                self._logger.info(
                    "Discarding reply for closed or cleared session",
                    extra={"session_id": session_id},
                )
                return TurnResult(session=current, turns=(), discarded=True)

            if fallback_text is None:
                try:
                    current = on_assistant_reply(current, self._build_reply(raw, persona, store, session_id))
                except Exception as e:
                    self._logger.exception(
                        "Could not process completion reply", extra={"session_id": session_id, "error": str(e)}
                    )
                    fallback_text = persona.fallback_text
            if fallback_text is not None:
                current = append_turn(current, _new_turn("assistant", fallback_text, is_fallback=True))
            current = replace(current, in_flight=False, updated_at=time.time())
            self._store.save(current)

        reply = current.turns[-1]
        payment_instruction = None
        if reply.affordance is Affordance.cart_summary and store is not None:
            payment_instruction = build_payment_instruction(store)

        self._logger.info(
            "Chat turn completed",
            extra={"session_id": session_id, "state": current.state.value, "store": current.store_name},
        )
        return TurnResult(session=current, turns=(user_turn, reply), payment_instruction=payment_instruction)

    def submit_payment_proof(self, session_id: str) -> TurnResult:
        """Record the proof-of-payment signal and emit the fixed acknowledgment."""
        with self._get_lock(session_id):
            session = self.get_session(session_id)
            if session.in_flight:
                raise SessionBusy("A reply is still being generated for this session.")

            session = on_payment_proof(session, _new_turn("user", PAYMENT_PROOF_TEXT, is_payment_proof=True))
            session = on_acknowledgment(session, _new_turn("assistant", PAYMENT_ACK_TEXT))
            session = replace(session, updated_at=time.time())
            self._store.save(session)

        self._logger.info(
            "Payment proof received, awaiting seller confirmation",
            extra={"session_id": session_id, "state": session.state.value, "store": session.store_name},
        )
        return TurnResult(session=session, turns=session.turns[-2:])

    def clear_session(self, session_id: str) -> ChatSession:
        with self._get_lock(session_id):
            session = reset_session(self.get_session(session_id))
            session = replace(session, updated_at=time.time())
            self._store.save(session)
        self._logger.info("Chat session cleared", extra={"session_id": session_id})
        return session

    def close_session(self, session_id: str) -> None:
        with self._get_lock(session_id):
            if not self._store.delete(session_id):
                raise SessionNotFound(f"Unknown chat session: {session_id}")
        with self._lock_lock:
            self._locks.pop(session_id, None)
        self._logger.info("Chat session closed", extra={"session_id": session_id})

    def _load_store(self, store_name: str | None) -> Store:
        store = self._catalog.get_store(store_name) if store_name else None
        if store is None:
            raise StoreNotFound(f"Unknown store: {store_name}")
        return store

    def _persona(self, kind: ChatKind, store: Store | None) -> Persona:
        if kind is ChatKind.store and store is not None:
            return store_persona(store)
        return village_persona(self._village_name)

    def _complete(self, request: CompletionRequest, persona: Persona, session_id: str) -> tuple[str, str | None]:
        """Returns (raw_text, fallback_text); fallback_text is set when the call failed."""
        try:
            return self._completion.complete(request), None
        except CompletionTransportError as e:
            self._logger.error("Completion failed", exc_info=True, extra={"session_id": session_id, "error": str(e)})
            return "", persona.fallback_text
        except CompletionContractError as e:
            self._logger.error("Completion unusable", exc_info=True, extra={"session_id": session_id, "error": str(e)})
            return "", persona.empty_response_text
        except Exception as e:
            self._logger.exception("Unexpected completion error", extra={"session_id": session_id, "error": str(e)})
            return "", persona.fallback_text

    def _build_reply(self, raw: str, persona: Persona, store: Store | None, session_id: str) -> Turn:
        if not persona.parses_orders or store is None:
            return _new_turn("assistant", raw)

        parsed = parse_response(raw)
        proposal = parsed.proposal
        if proposal is not None:
            try:
                proposal = reconcile_with_catalog(proposal, store, self._price_policy)
            except OrderRejected as e:
                self._logger.warning(
                    "Order proposal rejected",
                    extra={"session_id": session_id, "store": store.name, "reason": str(e)},
                )
                proposal = None

        return _new_turn(
            "assistant",
            parsed.display_text,
            raw_text=raw if raw != parsed.display_text else None,
            order_proposal=proposal,
        )


def _new_turn(role: str, text: str, **kwargs) -> Turn:
    return Turn(id=uuid.uuid4().hex, role=role, text=text, timestamp=time.time(), **kwargs)
