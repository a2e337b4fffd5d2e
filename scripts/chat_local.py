#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP).

Usage:
  python3 scripts/chat_local.py [store name]

What it does:
- Opens a chat session with a store (or the village assistant when no store is given)
- Sends your typed messages through the same ChatSessionUseCase the API uses
- Prints the reply, the session state and any order summary
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from app.application.exceptions import ProofNotExpected, SessionBusy
from app.application.use_cases.chat_session import ChatSessionUseCase, TurnResult
from app.domain.entities.chat_session import ChatKind
from app.wiring.dependencies import get_chat_use_case


def _print_header(store_name: str | None, session_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"store: {store_name or '(village assistant)'}")
    print(f"session_id: {session_id}")
    print("Type your message and press Enter.")
    print("Commands: /proof (send payment proof), /clear, /new, /quit, /help")
    print("-" * 60)


def _print_result(result: TurnResult) -> None:
    if result.discarded or result.session is None:
        print("(reply discarded)")
        return
    reply = result.turns[-1]
    print(f"(assistant) {reply.text}")
    if reply.order_proposal is not None:
        print("\n--- Ringkasan Pesanan ---")
        for item in reply.order_proposal.items:
            print(f"  {item.quantity}x {item.name}  Rp {item.subtotal:,}")
        print(f"  Total  Rp {reply.order_proposal.total:,}")
        if result.payment_instruction:
            print(f"  {result.payment_instruction}")
    print(f"[state: {result.session.state.value}]")


def _open(use_case: ChatSessionUseCase, store_name: str | None) -> str:
    kind = ChatKind.store if store_name else ChatKind.village
    session = use_case.open_session(kind, store_name)
    _print_header(session.store_name, session.id)
    print(f"(assistant) {session.turns[-1].text}")
    return session.id


def main() -> None:
    store_name = " ".join(sys.argv[1:]).strip() or None
    use_case = get_chat_use_case()
    session_id = _open(use_case, store_name)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            use_case.close_session(session_id)
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            use_case.close_session(session_id)
            return
        if cmd == "/help":
            print("Commands:")
            print("  /proof -> signal that a transfer receipt was uploaded")
            print("  /clear -> clear the chat history")
            print("  /new   -> close this chat and open a new one")
            print("  /quit  -> exit")
            continue
        if cmd == "/clear":
            use_case.clear_session(session_id)
            print("(history cleared)")
            continue
        if cmd == "/new":
            use_case.close_session(session_id)
            session_id = _open(use_case, store_name)
            continue

        try:
            if cmd == "/proof":
                result = use_case.submit_payment_proof(session_id)
            else:
                result = use_case.send_message(session_id, user_text)
        except (ProofNotExpected, SessionBusy) as e:
            print(f"ERROR: {e}")
            continue

        _print_result(result)


if __name__ == "__main__":
    main()
