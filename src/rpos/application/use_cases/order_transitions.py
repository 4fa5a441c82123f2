from __future__ import annotations

import logging
from datetime import datetime

from rpos.application.dto.responses import OrderResponse
from rpos.application.mappers.event_envelope import ORDERS_CHANNEL, serialize_order_event
from rpos.application.mappers.order_mapper import to_order_response
from rpos.application.metrics.order_lifecycle import (
    record_order_status,
    record_time_to_complete,
    record_time_to_ready,
    record_transition,
    record_transition_rejected,
)
from rpos.application.ports.clock import Clock
from rpos.application.ports.publisher import EventPublisher
from rpos.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from rpos.application.ports.transactions import UnitOfWork
from rpos.application.use_cases.context import TraceContext
from rpos.application.use_cases.publishing import publish_quietly
from rpos.domain.common.ids import OrderId
from rpos.domain.order.entities import Order, OrderStatus, OrderTransitionError

logger = logging.getLogger(__name__)


class OrderNotFoundError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class OrderConflictError(Exception):
    pass


class OrderTransition:
    action = ""
    event_type = ""

    def __init__(
        self,
        order_repository: OrderRepository,
        publisher: EventPublisher,
        clock: Clock,
        unit_of_work: UnitOfWork,
    ) -> None:
        self._order_repository = order_repository
        self._publisher = publisher
        self._clock = clock
        self._unit_of_work = unit_of_work

    def _apply(self, order: Order, now: datetime) -> Order:
        raise NotImplementedError

    def execute(self, order_id: OrderId, trace_ctx: TraceContext) -> OrderResponse:
        with self._unit_of_work.atomic():
            order = self._order_repository.get(order_id)
            if order is None:
                record_transition_rejected(self.action, None)
                raise OrderNotFoundError(f"order {order_id} not found")

            now = self._clock.now()
            try:
                updated = self._apply(order, now)
            except OrderTransitionError as exc:
                record_transition_rejected(self.action, order.status)
                logger.warning(
                    "order_transition_rejected",
                    extra={
                        "order_id": str(order_id),
                        "action": self.action,
                        "from_status": order.status.value,
                    },
                )
                raise InvalidOrderTransitionError(str(exc)) from exc

            try:
                persisted = self._order_repository.update_with_version(
                    updated,
                    expected_version=order.version,
                )
            except OptimisticConcurrencyError:
                current = self._order_repository.get(order_id)
                if current is None:
                    raise OrderNotFoundError(f"order {order_id} not found")
                if current.status == updated.status:
                    return to_order_response(current)
                raise OrderConflictError(f"order {order_id} status update conflict")

        self._record(order, persisted, now)
        publish_quietly(
            self._publisher,
            channel=ORDERS_CHANNEL,
            message=serialize_order_event(
                event_type=self.event_type,
                occurred_at=now,
                order=persisted,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
                previous_status=order.status.value,
            ),
        )
        return to_order_response(persisted)

    def _record(self, before: Order, after: Order, now: datetime) -> None:
        record_transition(from_status=before.status, to_status=after.status)
        record_order_status(after)
        if after.status == OrderStatus.READY and before.status == OrderStatus.COOKING:
            record_time_to_ready(after, now=now)
        if after.status == OrderStatus.COMPLETED:
            record_time_to_complete(after)
        logger.info(
            "order_status_changed",
            extra={
                "order_id": str(after.order_id),
                "action": self.action,
                "from_status": before.status.value,
                "to_status": after.status.value,
            },
        )


class AdvanceOrder(OrderTransition):
    """PENDING -> COOKING -> READY -> COMPLETED."""

    action = "advance"
    event_type = "order.advanced"

    def _apply(self, order: Order, now: datetime) -> Order:
        return order.advance(now)


class RecallOrder(OrderTransition):
    """READY -> COOKING -> PENDING."""

    action = "recall"
    event_type = "order.recalled"

    def _apply(self, order: Order, now: datetime) -> Order:
        return order.recall()


class CancelOrder(OrderTransition):
    action = "cancel"
    event_type = "order.cancelled"

    def _apply(self, order: Order, now: datetime) -> Order:
        return order.cancel(now)
