from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Iterable

from rpos.domain.order.entities import Order, OrderStatus

BUSINESS_HOURS = range(9, 23)
TOP_PRODUCTS_LIMIT = 5
DAILY_REVENUE_TARGET = 50_000


class TimeRange(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    revenue: int
    orders: int

    @property
    def label(self) -> str:
        return f"{self.hour}:00"


@dataclass(frozen=True)
class TopProduct:
    name: str
    quantity: int
    revenue: int


@dataclass(frozen=True)
class SalesSummary:
    time_range: TimeRange
    revenue: int
    order_count: int
    average_ticket: float
    revenue_progress: float
    average_cook_minutes: float | None
    hourly: tuple[HourlyBucket, ...]
    top_products: tuple[TopProduct, ...]


def window_bounds(
    time_range: TimeRange,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> tuple[datetime | None, datetime | None]:
    """Half-open ``[start, end)`` window in absolute time; ``None`` means unbounded."""
    local_now = now.astimezone(tz)
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    if time_range == TimeRange.TODAY:
        return midnight, None
    if time_range == TimeRange.YESTERDAY:
        return midnight - timedelta(days=1), midnight
    if time_range == TimeRange.WEEK:
        return midnight - timedelta(days=6), None
    if time_range == TimeRange.MONTH:
        return midnight.replace(day=1), None
    return None, None


def filter_orders(
    orders: Iterable[Order],
    time_range: TimeRange,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> list[Order]:
    start, end = window_bounds(time_range, now, tz)
    return [
        order
        for order in orders
        if (start is None or order.created_at >= start)
        and (end is None or order.created_at < end)
    ]


def hourly_buckets(orders: Iterable[Order], tz: tzinfo = timezone.utc) -> list[HourlyBucket]:
    revenue = {hour: 0 for hour in BUSINESS_HOURS}
    counts = {hour: 0 for hour in BUSINESS_HOURS}
    for order in orders:
        hour = order.created_at.astimezone(tz).hour
        if hour not in revenue:
            continue
        revenue[hour] += order.total_amount
        counts[hour] += 1
    return [
        HourlyBucket(hour=hour, revenue=revenue[hour], orders=counts[hour])
        for hour in sorted(revenue)
    ]


def top_products(orders: Iterable[Order], limit: int = TOP_PRODUCTS_LIMIT) -> list[TopProduct]:
    quantities: dict[str, int] = {}
    revenues: dict[str, int] = {}
    for order in orders:
        for line in order.lines:
            name = line.product.name
            quantities[name] = quantities.get(name, 0) + line.quantity
            revenues[name] = revenues.get(name, 0) + line.line_total

    ranked = sorted(quantities.items(), key=lambda item: item[1], reverse=True)
    return [
        TopProduct(name=name, quantity=quantity, revenue=revenues[name])
        for name, quantity in ranked[:limit]
    ]


def average_cook_minutes(orders: Iterable[Order]) -> float | None:
    durations = [
        (order.completed_at - order.created_at).total_seconds() / 60
        for order in orders
        if order.status == OrderStatus.COMPLETED and order.completed_at is not None
    ]
    if not durations:
        return None
    return round(sum(durations) / len(durations), 1)


def summarize_sales(
    orders: Iterable[Order],
    time_range: TimeRange,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> SalesSummary:
    window = filter_orders(orders, time_range, now, tz)
    sales = [order for order in window if order.status != OrderStatus.CANCELLED]

    revenue = sum(order.total_amount for order in sales)
    count = len(sales)
    return SalesSummary(
        time_range=time_range,
        revenue=revenue,
        order_count=count,
        average_ticket=revenue / count if count else 0.0,
        revenue_progress=min(revenue / DAILY_REVENUE_TARGET * 100, 100.0),
        average_cook_minutes=average_cook_minutes(sales),
        hourly=tuple(hourly_buckets(sales, tz)),
        top_products=tuple(top_products(sales)),
    )
