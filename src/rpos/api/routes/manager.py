from __future__ import annotations

from fastapi import APIRouter, Query, Request, Response

from rpos.api.dependencies import get_container
from rpos.application.dto.responses import InsightsResponse, SalesAnalyticsResponse
from rpos.application.use_cases.sales_analytics import (
    ExportOrders,
    GenerateManagerInsights,
    GetSalesAnalytics,
)

router = APIRouter()


def _sales_analytics_use_case(request: Request) -> GetSalesAnalytics:
    container = get_container(request)
    return GetSalesAnalytics(
        order_repository=container.order_repository,
        clock=container.clock,
        tz=container.tz,
    )


@router.get("/v1/manager/analytics", response_model=SalesAnalyticsResponse)
def sales_analytics(
    request: Request,
    time_range: str = Query(default="today", alias="range"),
) -> SalesAnalyticsResponse:
    return _sales_analytics_use_case(request).execute(time_range)


@router.get("/v1/manager/orders/export")
def export_orders(
    request: Request,
    time_range: str = Query(default="today", alias="range"),
) -> Response:
    container = get_container(request)
    use_case = ExportOrders(
        order_repository=container.order_repository,
        clock=container.clock,
        tz=container.tz,
    )
    body = use_case.execute(time_range)
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="orders-{time_range}.csv"'},
    )


@router.post("/v1/manager/insights", response_model=InsightsResponse)
def manager_insights(
    request: Request,
    time_range: str = Query(default="today", alias="range"),
) -> InsightsResponse:
    use_case = GenerateManagerInsights(
        analytics=_sales_analytics_use_case(request),
        insights=get_container(request).insights,
    )
    return use_case.execute(time_range)
