from __future__ import annotations

from dataclasses import dataclass

from app.application.exceptions import InconsistentOrderTotal


@dataclass(frozen=True)
class LineItem:
    name: str
    unit_price: int
    quantity: int

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderProposal:
    items: tuple[LineItem, ...]
    total: int

    def __post_init__(self) -> None:
        expected = sum(item.subtotal for item in self.items)
        if self.total != expected:
            raise InconsistentOrderTotal(
                f"Order total {self.total} does not match line items sum {expected}."
            )

    @staticmethod
    def from_items(items: list[LineItem] | tuple[LineItem, ...]) -> "OrderProposal":
        items = tuple(items)
        return OrderProposal(items=items, total=sum(item.subtotal for item in items))
