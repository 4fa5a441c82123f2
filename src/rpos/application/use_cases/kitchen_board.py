from __future__ import annotations

from rpos.application.dto.responses import KitchenBoardResponse
from rpos.application.mappers.report_mapper import to_kitchen_board_response
from rpos.application.metrics.order_lifecycle import record_kitchen_queue_size
from rpos.application.ports.clock import Clock
from rpos.application.ports.repositories import OrderRepository
from rpos.domain.kitchen.aggregation import build_kitchen_board


class GetKitchenBoard:
    def __init__(self, order_repository: OrderRepository, clock: Clock) -> None:
        self._order_repository = order_repository
        self._clock = clock

    def execute(self) -> KitchenBoardResponse:
        board = build_kitchen_board(self._order_repository.list_all(), now=self._clock.now())
        record_kitchen_queue_size(
            pending=board.counters.pending,
            cooking=board.counters.cooking,
            ready=board.counters.ready,
        )
        return to_kitchen_board_response(board)
