from __future__ import annotations

from fastapi import APIRouter, Request

from rpos.api.dependencies import current_trace_context, get_container
from rpos.api.routes.orders import transition_use_case
from rpos.application.dto.responses import KitchenBoardResponse, OrderResponse
from rpos.application.use_cases.kitchen_board import GetKitchenBoard
from rpos.application.use_cases.order_transitions import AdvanceOrder, RecallOrder
from rpos.domain.common.ids import OrderId

router = APIRouter()


@router.get("/v1/kitchen/board", response_model=KitchenBoardResponse)
def kitchen_board(request: Request) -> KitchenBoardResponse:
    container = get_container(request)
    use_case = GetKitchenBoard(order_repository=container.order_repository, clock=container.clock)
    return use_case.execute()


@router.post("/v1/kitchen/orders/{order_id}/bump", response_model=OrderResponse)
def bump_order(request: Request, order_id: str) -> OrderResponse:
    return transition_use_case(request, AdvanceOrder).execute(
        order_id=OrderId(order_id),
        trace_ctx=current_trace_context(),
    )


@router.post("/v1/kitchen/orders/{order_id}/recall", response_model=OrderResponse)
def recall_ticket(request: Request, order_id: str) -> OrderResponse:
    return transition_use_case(request, RecallOrder).execute(
        order_id=OrderId(order_id),
        trace_ctx=current_trace_context(),
    )
