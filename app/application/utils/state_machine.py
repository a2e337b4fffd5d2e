from __future__ import annotations

from dataclasses import replace

from app.application.exceptions import ProofNotExpected
from app.domain.entities.chat_session import ChatSession, ChatState
from app.domain.entities.turn import Affordance, Turn


def append_turn(session: ChatSession, turn: Turn) -> ChatSession:
    """Append a turn without any state transition (user turns, greetings, fallbacks)."""
    return replace(session, turns=session.turns + (turn,))


def on_assistant_reply(session: ChatSession, turn: Turn) -> ChatSession:
    """
    Append a model-generated turn and apply its transition.

    - terminal state: nothing moves, a proposal on the turn is dropped
    - turn carries a proposal: -> order_proposed, cart summary shown on the turn
    - otherwise: -> browsing, the previous proposal is no longer active
    """
    if session.state is ChatState.awaiting_manual_confirmation:
        turn = replace(turn, order_proposal=None, affordance=None)
        return append_turn(session, turn)

    if turn.order_proposal is not None:
        turn = replace(turn, affordance=Affordance.cart_summary)
        return replace(
            session,
            turns=session.turns + (turn,),
            state=ChatState.order_proposed,
            active_proposal=turn.order_proposal,
        )

    return replace(
        session,
        turns=session.turns + (turn,),
        state=ChatState.browsing,
        active_proposal=None,
    )


def on_payment_proof(session: ChatSession, turn: Turn) -> ChatSession:
    if session.state is not ChatState.order_proposed:
        raise ProofNotExpected(f"Payment proof not expected in state {session.state.value!r}.")
    return replace(session, turns=session.turns + (turn,), state=ChatState.proof_submitted)


def on_acknowledgment(session: ChatSession, turn: Turn) -> ChatSession:
    if session.state is not ChatState.proof_submitted:
        raise ProofNotExpected(f"Acknowledgment not expected in state {session.state.value!r}.")
    turn = replace(turn, affordance=Affordance.pending_confirmation)
    return replace(
        session,
        turns=session.turns + (turn,),
        state=ChatState.awaiting_manual_confirmation,
    )


def reset_session(session: ChatSession) -> ChatSession:
    """Clear history and proposal; completions started before the reset become stale."""
    return replace(
        session,
        turns=(),
        state=ChatState.browsing,
        active_proposal=None,
        in_flight=False,
        epoch=session.epoch + 1,
    )
