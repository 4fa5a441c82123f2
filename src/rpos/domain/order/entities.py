from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from rpos.domain.cart.entities import Cart, CartLine
from rpos.domain.common.ids import OrderId


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COOKING = "COOKING"
    READY = "READY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


class PaymentMethod(str, Enum):
    CARD = "CARD"
    CASH = "CASH"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

_ADVANCE: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.COOKING,
    OrderStatus.COOKING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
}

_RECALL: dict[OrderStatus, OrderStatus] = {
    OrderStatus.COOKING: OrderStatus.PENDING,
    OrderStatus.READY: OrderStatus.COOKING,
}


def next_status(status: OrderStatus) -> OrderStatus | None:
    return _ADVANCE.get(status)


def previous_status(status: OrderStatus) -> OrderStatus | None:
    return _RECALL.get(status)


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    customer_name: str
    status: OrderStatus
    lines: tuple[CartLine, ...]
    total_amount: int
    created_at: datetime
    table_number: str | None = None
    completed_at: datetime | None = None
    priority: bool = False
    allergies: tuple[str, ...] = ()
    payment_method: PaymentMethod = PaymentMethod.CARD
    version: int = 1

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        expected_total = sum(line.line_total for line in self.lines)
        if self.total_amount != expected_total:
            raise ValueError("order total must equal sum of line totals")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")
        if self.status.is_terminal and self.completed_at is None:
            raise ValueError("completed_at must be set for terminal statuses")
        if not self.status.is_terminal and self.completed_at is not None:
            raise ValueError("completed_at is only set for terminal statuses")

    @property
    def display_code(self) -> str:
        """Ticket number: the id's sequence, at least four digits wide.

        It grows past four digits instead of wrapping, so no two orders share a code.
        """
        parts = str(self.order_id).split("_")
        if len(parts) > 2 and parts[1].isdigit():
            return parts[1].lstrip("0").zfill(4)
        return str(self.order_id)[-4:]

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def advance(self, now: datetime) -> Order:
        target = next_status(self.status)
        if target is None:
            raise OrderTransitionError(f"cannot advance order from status={self.status.value}")
        completed_at = now if target.is_terminal else None
        return replace(self, status=target, completed_at=completed_at)

    def recall(self) -> Order:
        target = previous_status(self.status)
        if target is None:
            raise OrderTransitionError(f"cannot recall order from status={self.status.value}")
        return replace(self, status=target)

    def cancel(self, now: datetime) -> Order:
        if self.status.is_terminal:
            raise OrderTransitionError(f"cannot cancel order from status={self.status.value}")
        return replace(self, status=OrderStatus.CANCELLED, completed_at=now)


def create_pending_order(
    order_id: OrderId,
    cart: Cart,
    customer_name: str,
    now: datetime,
    table_number: str | None = None,
    priority: bool = False,
    allergies: tuple[str, ...] = (),
    payment_method: PaymentMethod = PaymentMethod.CARD,
) -> Order:
    if cart.is_empty:
        raise ValueError("order must contain at least one line")

    return Order(
        order_id=order_id,
        customer_name=customer_name,
        table_number=table_number or None,
        status=OrderStatus.PENDING,
        lines=cart.lines,
        total_amount=cart.total,
        created_at=now,
        priority=priority,
        allergies=allergies,
        payment_method=payment_method,
    )


class OrderTransitionError(Exception):
    pass
