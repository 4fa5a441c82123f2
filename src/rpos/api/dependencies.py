from __future__ import annotations

from fastapi import Request

from rpos.api.middleware.request_id import get_request_id
from rpos.application.use_cases.context import TraceContext
from rpos.infrastructure.bootstrap import Container
from rpos.infrastructure.observability.otel import current_trace_id


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())
