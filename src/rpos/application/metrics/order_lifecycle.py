from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Gauge, Histogram

from rpos.domain.cart.entities import Cart
from rpos.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "rpos_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "rpos_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_TRANSITION_REJECTED_TOTAL = Counter(
    "rpos_order_transition_rejected_total",
    "Total number of rejected order lifecycle transitions.",
    ["action", "status"],
)

ORDER_TIME_TO_READY_SECONDS = Histogram(
    "rpos_order_time_to_ready_seconds",
    "Time between order placement and readiness.",
)

ORDER_TIME_TO_COMPLETE_SECONDS = Histogram(
    "rpos_order_time_to_complete_seconds",
    "Time between order placement and hand-off to the customer.",
)

ORDER_VALUE = Histogram(
    "rpos_order_value",
    "Order total amount at placement.",
    buckets=(100, 250, 500, 750, 1000, 1500, 2500, 5000),
)

KITCHEN_QUEUE_SIZE = Gauge(
    "rpos_kitchen_queue_size",
    "Current number of active orders on the kitchen board.",
    ["status"],
)

CART_LINES = Gauge(
    "rpos_cart_lines",
    "Number of distinct configurations in the active cart.",
)


def record_order_status(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()


def record_order_placed(order: Order) -> None:
    record_order_status(order)
    ORDER_VALUE.observe(order.total_amount)


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_transition_rejected(action: str, status: OrderStatus | None) -> None:
    ORDER_TRANSITION_REJECTED_TOTAL.labels(
        action=action,
        status=status.value if status else "UNKNOWN",
    ).inc()


def record_time_to_ready(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_READY_SECONDS.observe(max((current - order.created_at).total_seconds(), 0.0))


def record_time_to_complete(order: Order) -> None:
    if order.completed_at is None:
        return
    ORDER_TIME_TO_COMPLETE_SECONDS.observe(
        max((order.completed_at - order.created_at).total_seconds(), 0.0)
    )


def record_kitchen_queue_size(pending: int, cooking: int, ready: int) -> None:
    KITCHEN_QUEUE_SIZE.labels(status=OrderStatus.PENDING.value).set(pending)
    KITCHEN_QUEUE_SIZE.labels(status=OrderStatus.COOKING.value).set(cooking)
    KITCHEN_QUEUE_SIZE.labels(status=OrderStatus.READY.value).set(ready)


def record_cart(cart: Cart) -> None:
    CART_LINES.set(len(cart.lines))
