from __future__ import annotations

from rpos.application.dto.responses import OrderListResponse, OrderResponse
from rpos.application.mappers.order_mapper import to_order_list_response, to_order_response
from rpos.application.ports.repositories import OrderRepository
from rpos.application.use_cases.order_transitions import OrderNotFoundError
from rpos.domain.common.ids import OrderId


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_response(order)


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self) -> OrderListResponse:
        return to_order_list_response(self._order_repository.list_all())
