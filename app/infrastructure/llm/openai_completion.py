from __future__ import annotations

from typing import Any

from openai import OpenAI

from app.application.dto.completion_request import CompletionRequest
from app.application.exceptions import CompletionContractError, CompletionTransportError
from app.application.ports.completion import CompletionPort
from app.core.config import settings


class OpenAICompletion(CompletionPort):
    """
    OpenAI-backed adapter implementing CompletionPort.

    Contract guarantees:
    - one chat.completions call per complete(), SDK retries disabled
    - the call is bounded by COMPLETION_TIMEOUT_SECONDS
    - Raises:
        CompletionTransportError: networking/provider failures and timeouts
        CompletionContractError: empty response text
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.COMPLETION_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def complete(self, request: CompletionRequest) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=settings.OPENAI_MODEL_CHAT,
                messages=build_messages(request),
                temperature=settings.OPENAI_TEMPERATURE_CHAT,
                max_tokens=settings.OPENAI_MAX_TOKENS,
            )
        except Exception as e:
            raise CompletionTransportError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise CompletionContractError("Completion returned empty response text.")

        return content


def build_messages(request: CompletionRequest) -> list[dict[str, Any]]:
    system_content = request.instruction
    if request.catalog_text:
        system_content += f"\nDATA PRODUK:\n{request.catalog_text}\n"

    messages: list[dict[str, Any]] = [{"role": "system", "content": system_content}]
    for item in request.history:
        role = "assistant" if item.role == "assistant" else "user"
        messages.append({"role": role, "content": item.text})
    messages.append({"role": "user", "content": request.latest_message})
    return messages
