from __future__ import annotations

import logging

from rpos.application.dto.requests import PlaceOrderRequest
from rpos.application.dto.responses import OrderResponse
from rpos.application.mappers.event_envelope import (
    CART_CHANNEL,
    ORDERS_CHANNEL,
    serialize_cart_event,
    serialize_order_event,
)
from rpos.application.mappers.order_mapper import to_order_response
from rpos.application.metrics.order_lifecycle import record_cart, record_order_placed
from rpos.application.ports.clock import Clock
from rpos.application.ports.publisher import EventPublisher
from rpos.application.ports.repositories import (
    CartRepository,
    OptimisticConcurrencyError,
    OrderRepository,
)
from rpos.application.ports.transactions import UnitOfWork
from rpos.application.use_cases.cart import CartConflictError
from rpos.application.use_cases.context import TraceContext
from rpos.application.use_cases.publishing import publish_quietly
from rpos.domain.order.entities import PaymentMethod, create_pending_order
from rpos.domain.order.identity import OrderIdGenerator

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    pass


class PlaceOrder:
    def __init__(
        self,
        cart_repository: CartRepository,
        order_repository: OrderRepository,
        publisher: EventPublisher,
        clock: Clock,
        id_generator: OrderIdGenerator,
        unit_of_work: UnitOfWork,
    ) -> None:
        self._cart_repository = cart_repository
        self._order_repository = order_repository
        self._publisher = publisher
        self._clock = clock
        self._id_generator = id_generator
        self._unit_of_work = unit_of_work

    def execute(self, request_dto: PlaceOrderRequest, trace_ctx: TraceContext) -> OrderResponse:
        with self._unit_of_work.atomic():
            cart = self._cart_repository.get()
            if cart.is_empty:
                raise EmptyCartError("cannot place an order from an empty cart")

            now = self._clock.now()
            order = create_pending_order(
                order_id=self._id_generator.next_id(),
                cart=cart,
                customer_name=request_dto.customer_name.strip(),
                now=now,
                table_number=request_dto.table_number,
                priority=request_dto.priority,
                allergies=tuple(item.strip() for item in request_dto.allergies if item.strip()),
                payment_method=PaymentMethod(request_dto.payment_method),
            )

            # The cart is claimed before the order is stored; a concurrent edit aborts checkout.
            try:
                cleared = self._cart_repository.save(
                    cart.cleared(),
                    expected_version=cart.version,
                )
            except OptimisticConcurrencyError as exc:
                raise CartConflictError("cart changed during checkout, retry") from exc
            self._order_repository.add(order)

        record_order_placed(order)
        record_cart(cleared)
        logger.info(
            "order_placed",
            extra={"order_id": str(order.order_id), "total_amount": order.total_amount},
        )
        publish_quietly(
            self._publisher,
            channel=ORDERS_CHANNEL,
            message=serialize_order_event(
                event_type="order.placed",
                occurred_at=order.created_at,
                order=order,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
            ),
        )
        publish_quietly(
            self._publisher,
            channel=CART_CHANNEL,
            message=serialize_cart_event(
                occurred_at=now,
                cart=cleared,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
            ),
        )

        return to_order_response(order)
