from __future__ import annotations

from fastapi import APIRouter, Request, status

from rpos.api.dependencies import current_trace_context, get_container
from rpos.application.dto.requests import AddToCartRequest
from rpos.application.dto.responses import CartResponse
from rpos.application.use_cases.cart import AddToCart, ClearCart, GetCart, RemoveFromCart

router = APIRouter()


def _add_to_cart_use_case(request: Request) -> AddToCart:
    container = get_container(request)
    return AddToCart(
        catalog=container.catalog,
        cart_repository=container.cart_repository,
        publisher=container.event_bus,
        clock=container.clock,
        unit_of_work=container.store,
    )


def _remove_from_cart_use_case(request: Request) -> RemoveFromCart:
    container = get_container(request)
    return RemoveFromCart(
        cart_repository=container.cart_repository,
        publisher=container.event_bus,
        clock=container.clock,
        unit_of_work=container.store,
    )


def _clear_cart_use_case(request: Request) -> ClearCart:
    container = get_container(request)
    return ClearCart(
        cart_repository=container.cart_repository,
        publisher=container.event_bus,
        clock=container.clock,
        unit_of_work=container.store,
    )


@router.get("/v1/cart", response_model=CartResponse)
def get_cart(request: Request) -> CartResponse:
    return GetCart(cart_repository=get_container(request).cart_repository).execute()


@router.post(
    "/v1/cart/lines",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_cart_line(request: Request, request_dto: AddToCartRequest) -> CartResponse:
    return _add_to_cart_use_case(request).execute(
        request_dto=request_dto,
        trace_ctx=current_trace_context(),
    )


@router.delete("/v1/cart/lines/{line_id}", response_model=CartResponse)
def remove_cart_line(request: Request, line_id: str) -> CartResponse:
    return _remove_from_cart_use_case(request).execute(
        line_id=line_id,
        trace_ctx=current_trace_context(),
    )


@router.delete("/v1/cart", response_model=CartResponse)
def clear_cart(request: Request) -> CartResponse:
    return _clear_cart_use_case(request).execute(trace_ctx=current_trace_context())
