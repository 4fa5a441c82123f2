from __future__ import annotations

from fastapi import APIRouter, Request, status

from rpos.api.dependencies import current_trace_context, get_container
from rpos.application.dto.requests import PlaceOrderRequest
from rpos.application.dto.responses import OrderListResponse, OrderResponse
from rpos.application.use_cases.get_order import GetOrder, ListOrders
from rpos.application.use_cases.order_transitions import (
    AdvanceOrder,
    CancelOrder,
    RecallOrder,
    OrderTransition,
)
from rpos.application.use_cases.place_order import PlaceOrder
from rpos.domain.common.ids import OrderId

router = APIRouter()


def _place_order_use_case(request: Request) -> PlaceOrder:
    container = get_container(request)
    return PlaceOrder(
        cart_repository=container.cart_repository,
        order_repository=container.order_repository,
        publisher=container.event_bus,
        clock=container.clock,
        id_generator=container.id_generator,
        unit_of_work=container.store,
    )


def transition_use_case(request: Request, use_case_cls: type[OrderTransition]) -> OrderTransition:
    container = get_container(request)
    return use_case_cls(
        order_repository=container.order_repository,
        publisher=container.event_bus,
        clock=container.clock,
        unit_of_work=container.store,
    )


@router.post(
    "/v1/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def place_order(request: Request, request_dto: PlaceOrderRequest) -> OrderResponse:
    return _place_order_use_case(request).execute(
        request_dto=request_dto,
        trace_ctx=current_trace_context(),
    )


@router.get("/v1/orders", response_model=OrderListResponse)
def list_orders(request: Request) -> OrderListResponse:
    return ListOrders(order_repository=get_container(request).order_repository).execute()


@router.get("/v1/orders/{order_id}", response_model=OrderResponse)
def get_order(request: Request, order_id: str) -> OrderResponse:
    use_case = GetOrder(order_repository=get_container(request).order_repository)
    return use_case.execute(order_id=OrderId(order_id))


@router.post("/v1/orders/{order_id}/advance", response_model=OrderResponse)
def advance_order(request: Request, order_id: str) -> OrderResponse:
    return transition_use_case(request, AdvanceOrder).execute(
        order_id=OrderId(order_id),
        trace_ctx=current_trace_context(),
    )


@router.post("/v1/orders/{order_id}/recall", response_model=OrderResponse)
def recall_order(request: Request, order_id: str) -> OrderResponse:
    return transition_use_case(request, RecallOrder).execute(
        order_id=OrderId(order_id),
        trace_ctx=current_trace_context(),
    )


@router.post("/v1/orders/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(request: Request, order_id: str) -> OrderResponse:
    return transition_use_case(request, CancelOrder).execute(
        order_id=OrderId(order_id),
        trace_ctx=current_trace_context(),
    )
