from abc import ABC, abstractmethod

from app.application.dto.completion_request import CompletionRequest


class CompletionPort(ABC):
    @abstractmethod
    def complete(self, request: CompletionRequest) -> str:
        """
        Send one completion request and return the full response text.

        Requirements:
        - Exactly one provider call per invocation; no automatic retries
        - Must be bounded by a timeout; expiry is reported as a transport error
        - The returned text may embed one <<<ORDER_START>>> ... <<<ORDER_END>>> block

        Raises:
            CompletionTransportError: provider unreachable, erroring or timed out
            CompletionContractError: provider answered with no usable text
        """
        raise NotImplementedError
