class CompletionTransportError(RuntimeError):
    """Raised when the completion provider fails (timeouts, network errors, service unavailable)."""
    pass


class CompletionContractError(RuntimeError):
    """Raised when the completion provider returns an unusable response (e.g. empty text)."""
    pass


class MalformedOrderPayload(ValueError):
    """Raised when an order block is present but its payload cannot be decoded."""
    pass


class InconsistentOrderTotal(ValueError):
    """Raised when an order total differs from the sum of its line items."""
    pass


class OrderRejected(ValueError):
    """Raised when a decoded order does not agree with the store catalog."""
    pass


class EmptyUserInput(ValueError):
    pass


class ProofNotExpected(RuntimeError):
    """Raised when a payment proof arrives while no order is waiting for payment."""
    pass


class SessionBusy(RuntimeError):
    """Raised when a message is sent while a completion for the session is still in flight."""
    pass


class SessionNotFound(LookupError):
    pass


class StoreNotFound(LookupError):
    pass
