from __future__ import annotations

from datetime import timezone, tzinfo

from rpos.application.dto.responses import InsightsResponse, SalesAnalyticsResponse
from rpos.application.mappers.csv_export import render_orders_csv
from rpos.application.mappers.report_mapper import to_sales_analytics_response
from rpos.application.ports.clock import Clock
from rpos.application.ports.insights import InsightsGenerator
from rpos.application.ports.repositories import OrderRepository
from rpos.domain.analytics.sales import (
    DAILY_REVENUE_TARGET,
    SalesSummary,
    TimeRange,
    filter_orders,
    summarize_sales,
)


class InvalidTimeRangeError(Exception):
    pass


def parse_time_range(value: str) -> TimeRange:
    try:
        return TimeRange(value.lower())
    except ValueError as exc:
        allowed = ", ".join(item.value for item in TimeRange)
        raise InvalidTimeRangeError(
            f"invalid time range: {value} (expected one of {allowed})"
        ) from exc


def build_report_text(summary: SalesSummary) -> str:
    top_item = summary.top_products[0].name if summary.top_products else "N/A"
    cook_time = (
        f"{summary.average_cook_minutes} min"
        if summary.average_cook_minutes is not None
        else "no completed orders"
    )
    return "\n".join(
        [
            f"Restaurant Report ({summary.time_range.value}):",
            f"- Revenue: {summary.revenue} RUB (Goal: {DAILY_REVENUE_TARGET})",
            f"- Orders: {summary.order_count}",
            f"- Top Item: {top_item}",
            f"- Avg Ticket: {round(summary.average_ticket)} RUB",
            f"- Kitchen Speed: {cook_time}",
        ]
    )


class GetSalesAnalytics:
    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Clock,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._order_repository = order_repository
        self._clock = clock
        self._tz = tz

    def summarize(self, time_range: str) -> SalesSummary:
        return summarize_sales(
            self._order_repository.list_all(),
            time_range=parse_time_range(time_range),
            now=self._clock.now(),
            tz=self._tz,
        )

    def execute(self, time_range: str = "today") -> SalesAnalyticsResponse:
        return to_sales_analytics_response(self.summarize(time_range))


class ExportOrders:
    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Clock,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._order_repository = order_repository
        self._clock = clock
        self._tz = tz

    def execute(self, time_range: str = "today") -> str:
        orders = filter_orders(
            self._order_repository.list_all(),
            time_range=parse_time_range(time_range),
            now=self._clock.now(),
            tz=self._tz,
        )
        return render_orders_csv(orders, tz=self._tz)


class GenerateManagerInsights:
    def __init__(self, analytics: GetSalesAnalytics, insights: InsightsGenerator) -> None:
        self._analytics = analytics
        self._insights = insights

    def execute(self, time_range: str = "today") -> InsightsResponse:
        summary = self._analytics.summarize(time_range)
        text = self._insights.generate(build_report_text(summary))
        return InsightsResponse(range=summary.time_range.value, text=text)
