from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rpos.api.middleware.request_id import get_request_id
from rpos.application.use_cases.cart import (
    CartConflictError,
    InvalidModifierSelectionError,
    UnknownModifierError,
    UnknownProductError,
)
from rpos.application.use_cases.order_transitions import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from rpos.application.use_cases.place_order import EmptyCartError
from rpos.application.use_cases.sales_analytics import InvalidTimeRangeError

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details or {}),
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info(
            "request_rejected",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "reason": code,
            },
        )
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    return _error_response(
        status_code=http_exc.status_code,
        code=_HTTP_STATUS_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderConflictError, 409, "CONFLICT"),
        (EmptyCartError, 409, "EMPTY_CART"),
        (CartConflictError, 409, "CONFLICT"),
        (UnknownProductError, 404, "UNKNOWN_PRODUCT"),
        (UnknownModifierError, 400, "UNKNOWN_MODIFIER"),
        (InvalidModifierSelectionError, 400, "INVALID_MODIFIER_SELECTION"),
        (InvalidTimeRangeError, 400, "INVALID_TIME_RANGE"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
