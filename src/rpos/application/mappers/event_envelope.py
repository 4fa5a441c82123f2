from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from rpos.domain.cart.entities import Cart, CartLine
from rpos.domain.order.entities import Order

ORDERS_CHANNEL = "events:orders"
CART_CHANNEL = "events:cart"


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    topic: str,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "topic": topic,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def _line_payload(line: CartLine) -> dict[str, Any]:
    return {
        "lineId": str(line.line_id),
        "productId": str(line.product.product_id),
        "name": line.product.name,
        "quantity": line.quantity,
        "modifiers": [
            {
                "modifierId": str(modifier.modifier_id),
                "name": modifier.name,
                "price": modifier.price,
                "action": modifier.action.value,
            }
            for modifier in line.modifiers
        ],
        "comment": line.comment,
        "unitPrice": line.unit_price,
        "lineTotal": line.line_total,
    }


def serialize_order_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order: Order,
    trace_id: str | None,
    request_id: str | None,
    previous_status: str | None = None,
) -> str:
    return _serialize_event(
        event_type=event_type,
        occurred_at=occurred_at,
        topic="orders",
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "orderId": str(order.order_id),
            "displayCode": order.display_code,
            "customerName": order.customer_name,
            "tableNumber": order.table_number,
            "status": order.status.value,
            "previousStatus": previous_status,
            "totalAmount": order.total_amount,
            "createdAt": order.created_at.isoformat(),
            "completedAt": order.completed_at.isoformat() if order.completed_at else None,
            "priority": order.priority,
            "allergies": list(order.allergies),
            "lines": [_line_payload(line) for line in order.lines],
        },
    )


def serialize_cart_event(
    *,
    occurred_at: datetime,
    cart: Cart,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type="cart.updated",
        occurred_at=occurred_at,
        topic="cart",
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "version": cart.version,
            "total": cart.total,
            "itemCount": cart.item_count,
            "lines": [_line_payload(line) for line in cart.lines],
        },
    )
