from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.v1.schemas import (
    CatalogEntrySchema,
    ChatSessionSchema,
    LineItemSchema,
    OpenChatRequestSchema,
    OrderProposalSchema,
    SendMessageRequestSchema,
    StoreSchema,
    TurnResultSchema,
    TurnSchema,
)
from app.application.exceptions import (
    EmptyUserInput,
    ProofNotExpected,
    SessionBusy,
    SessionNotFound,
    StoreNotFound,
)
from app.application.ports.catalog import CatalogPort
from app.application.use_cases.chat_session import ChatSessionUseCase, TurnResult
from app.domain.entities.chat_session import ChatSession
from app.domain.entities.order import OrderProposal
from app.domain.entities.turn import Turn
from app.wiring.dependencies import get_catalog, get_chat_use_case

router = APIRouter()


@router.get("/stores", response_model=list[StoreSchema])
def list_stores(catalog: CatalogPort = Depends(get_catalog)):
    return [
        StoreSchema(
            name=s.name,
            phone=s.phone,
            bank=s.bank,
            products=[CatalogEntrySchema(name=p.name, price=p.price, stock=p.stock) for p in s.products],
        )
        for s in catalog.list_stores()
    ]


@router.post("/chats", response_model=ChatSessionSchema, status_code=201)
def open_chat(
    req: OpenChatRequestSchema,
    uc: ChatSessionUseCase = Depends(get_chat_use_case),
):
    try:
        session = uc.open_session(kind=req.kind, store_name=req.store_name)
    except StoreNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_schema(session)


@router.get("/chats/{session_id}", response_model=ChatSessionSchema)
def get_chat(session_id: str, uc: ChatSessionUseCase = Depends(get_chat_use_case)):
    try:
        session = uc.get_session(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_schema(session)


@router.post("/chats/{session_id}/messages", response_model=TurnResultSchema)
def send_message(
    session_id: str,
    req: SendMessageRequestSchema,
    uc: ChatSessionUseCase = Depends(get_chat_use_case),
):
    try:
        result = uc.send_message(session_id, req.text)
    except EmptyUserInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SessionNotFound, StoreNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionBusy as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _turn_result_schema(result)


@router.post("/chats/{session_id}/payment-proof", response_model=TurnResultSchema)
def submit_payment_proof(session_id: str, uc: ChatSessionUseCase = Depends(get_chat_use_case)):
    try:
        result = uc.submit_payment_proof(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SessionBusy, ProofNotExpected) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _turn_result_schema(result)


@router.delete("/chats/{session_id}/messages", response_model=ChatSessionSchema)
def clear_chat(session_id: str, uc: ChatSessionUseCase = Depends(get_chat_use_case)):
    try:
        session = uc.clear_session(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_schema(session)


@router.delete("/chats/{session_id}", status_code=204)
def close_chat(session_id: str, uc: ChatSessionUseCase = Depends(get_chat_use_case)) -> Response:
    try:
        uc.close_session(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


def _proposal_schema(proposal: OrderProposal | None) -> OrderProposalSchema | None:
    if proposal is None:
        return None
    return OrderProposalSchema(
        items=[
            LineItemSchema(name=i.name, unit_price=i.unit_price, quantity=i.quantity, subtotal=i.subtotal)
            for i in proposal.items
        ],
        total=proposal.total,
    )


def _turn_schema(turn: Turn) -> TurnSchema:
    return TurnSchema(
        id=turn.id,
        role=turn.role,
        text=turn.text,
        timestamp=turn.timestamp,
        is_payment_proof=turn.is_payment_proof,
        is_fallback=turn.is_fallback,
        order_proposal=_proposal_schema(turn.order_proposal),
        affordance=turn.affordance,
    )


def _session_schema(session: ChatSession) -> ChatSessionSchema:
    return ChatSessionSchema(
        id=session.id,
        kind=session.kind,
        store_name=session.store_name,
        state=session.state,
        active_proposal=_proposal_schema(session.active_proposal),
        in_flight=session.in_flight,
        turns=[_turn_schema(t) for t in session.turns],
    )


def _turn_result_schema(result: TurnResult) -> TurnResultSchema:
    return TurnResultSchema(
        session=_session_schema(result.session) if result.session else None,
        turns=[_turn_schema(t) for t in result.turns],
        discarded=result.discarded,
        payment_instruction=result.payment_instruction,
    )
