from __future__ import annotations

from rpos.application.dto.responses import (
    CartLineResponse,
    CartResponse,
    ModifierResponse,
    OrderListResponse,
    OrderResponse,
)
from rpos.domain.cart.entities import Cart, CartLine
from rpos.domain.order.entities import Order


def to_cart_line_response(line: CartLine) -> CartLineResponse:
    return CartLineResponse(
        lineId=str(line.line_id),
        productId=str(line.product.product_id),
        name=line.product.name,
        category=line.product.category,
        quantity=line.quantity,
        modifiers=[
            ModifierResponse(
                modifierId=str(modifier.modifier_id),
                name=modifier.name,
                price=modifier.price,
                action=modifier.action.value,
            )
            for modifier in line.modifiers
        ],
        comment=line.comment,
        unitPrice=line.unit_price,
        lineTotal=line.line_total,
    )


def to_cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        lines=[to_cart_line_response(line) for line in cart.lines],
        total=cart.total,
        itemCount=cart.item_count,
        version=cart.version,
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        displayCode=order.display_code,
        customerName=order.customer_name,
        tableNumber=order.table_number,
        status=order.status.value,
        lines=[to_cart_line_response(line) for line in order.lines],
        totalAmount=order.total_amount,
        createdAt=order.created_at,
        completedAt=order.completed_at,
        priority=order.priority,
        allergies=list(order.allergies),
        paymentMethod=order.payment_method.value,
    )


def to_order_list_response(orders: list[Order]) -> OrderListResponse:
    return OrderListResponse(orders=[to_order_response(order) for order in orders])
