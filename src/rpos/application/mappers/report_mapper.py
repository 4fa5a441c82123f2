from __future__ import annotations

from rpos.application.dto.responses import (
    HourlyBucketResponse,
    KitchenBoardResponse,
    KitchenCountersResponse,
    KitchenTicketResponse,
    ProductionItemResponse,
    SalesAnalyticsResponse,
    TopProductResponse,
)
from rpos.application.mappers.order_mapper import to_order_response
from rpos.domain.analytics.sales import SalesSummary
from rpos.domain.kitchen.aggregation import KitchenBoard


def to_kitchen_board_response(board: KitchenBoard) -> KitchenBoardResponse:
    return KitchenBoardResponse(
        tickets=[
            KitchenTicketResponse(
                order=to_order_response(ticket.order),
                elapsedMinutes=ticket.elapsed_minutes,
                urgency=ticket.urgency.value,
            )
            for ticket in board.tickets
        ],
        production=[
            ProductionItemResponse(name=item.name, count=item.count, station=item.station)
            for item in board.production
        ],
        counters=KitchenCountersResponse(
            pending=board.counters.pending,
            cooking=board.counters.cooking,
            ready=board.counters.ready,
        ),
        generatedAt=board.generated_at,
    )


def to_sales_analytics_response(summary: SalesSummary) -> SalesAnalyticsResponse:
    return SalesAnalyticsResponse(
        range=summary.time_range.value,
        revenue=summary.revenue,
        orderCount=summary.order_count,
        averageTicket=summary.average_ticket,
        revenueProgress=summary.revenue_progress,
        averageCookMinutes=summary.average_cook_minutes,
        hourly=[
            HourlyBucketResponse(
                hour=bucket.hour,
                label=bucket.label,
                revenue=bucket.revenue,
                orders=bucket.orders,
            )
            for bucket in summary.hourly
        ],
        topProducts=[
            TopProductResponse(name=item.name, quantity=item.quantity, revenue=item.revenue)
            for item in summary.top_products
        ],
    )
