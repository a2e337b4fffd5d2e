from pydantic import BaseModel, Field, field_validator

from app.domain.entities.chat_session import ChatKind, ChatState
from app.domain.entities.turn import Affordance


class OpenChatRequestSchema(BaseModel):
    kind: ChatKind = ChatKind.store
    store_name: str | None = None


class SendMessageRequestSchema(BaseModel):
    text: str = Field(min_length=1, max_length=4000)

    @field_validator("text")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class LineItemSchema(BaseModel):
    name: str
    unit_price: int
    quantity: int
    subtotal: int


class OrderProposalSchema(BaseModel):
    items: list[LineItemSchema]
    total: int


class TurnSchema(BaseModel):
    id: str
    role: str
    text: str
    timestamp: float
    is_payment_proof: bool = False
    is_fallback: bool = False
    order_proposal: OrderProposalSchema | None = None
    affordance: Affordance | None = None


class ChatSessionSchema(BaseModel):
    id: str
    kind: ChatKind
    store_name: str | None = None
    state: ChatState
    active_proposal: OrderProposalSchema | None = None
    in_flight: bool = False
    turns: list[TurnSchema] = Field(default_factory=list)


class TurnResultSchema(BaseModel):
    session: ChatSessionSchema | None = None
    turns: list[TurnSchema] = Field(default_factory=list)
    discarded: bool = False
    payment_instruction: str | None = None


class CatalogEntrySchema(BaseModel):
    name: str
    price: int
    stock: int


class StoreSchema(BaseModel):
    name: str
    phone: str
    bank: str
    products: list[CatalogEntrySchema] = Field(default_factory=list)
