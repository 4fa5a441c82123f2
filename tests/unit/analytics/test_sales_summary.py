from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from fakes import NOW
from rpos.domain.analytics.sales import (
    TimeRange,
    filter_orders,
    hourly_buckets,
    summarize_sales,
    top_products,
    window_bounds,
)
from rpos.domain.cart.entities import Cart
from rpos.domain.catalog.entities import Catalog
from rpos.domain.common.ids import CartLineId, OrderId
from rpos.domain.order.entities import Order, OrderStatus, create_pending_order


def _order(
    catalog: Catalog,
    sequence: int,
    items: list[tuple[str, int]],
    created_at: datetime,
    status: OrderStatus = OrderStatus.PENDING,
    completed_after: timedelta = timedelta(minutes=12),
) -> Order:
    cart = Cart()
    for index, (product_id, quantity) in enumerate(items):
        cart = cart.add(
            CartLineId(f"crt_{sequence}_{index}"),
            catalog.get_product(product_id),
            quantity=quantity,
        )
    order = create_pending_order(OrderId(f"ord_{sequence:06d}_t"), cart, "Guest", now=created_at)
    if status == OrderStatus.CANCELLED:
        return order.cancel(created_at + completed_after)
    while order.status != status:
        order = order.advance(created_at + completed_after)
    return order


def test_empty_input_degrades_to_zeros() -> None:
    summary = summarize_sales([], TimeRange.ALL, now=NOW)

    assert summary.revenue == 0
    assert summary.order_count == 0
    assert summary.average_ticket == 0.0
    assert summary.revenue_progress == 0.0
    assert summary.average_cook_minutes is None
    assert summary.top_products == ()
    assert [bucket.hour for bucket in summary.hourly] == list(range(9, 23))
    assert all(bucket.revenue == 0 for bucket in summary.hourly)


def test_cancelled_orders_are_excluded(catalog: Catalog) -> None:
    orders = [
        _order(catalog, 1, [("p1", 1)], NOW),
        _order(catalog, 2, [("p11", 4)], NOW, status=OrderStatus.CANCELLED),
        _order(catalog, 3, [("p8", 2)], NOW, status=OrderStatus.COMPLETED),
    ]

    summary = summarize_sales(orders, TimeRange.TODAY, now=NOW)

    assert summary.revenue == 490 + 240
    assert summary.order_count == 2
    assert summary.average_ticket == 365.0
    assert summary.average_cook_minutes == 12.0
    assert all("Combo" not in product.name for product in summary.top_products)


def test_revenue_progress_is_capped(catalog: Catalog) -> None:
    orders = [_order(catalog, 1, [("p11", 100)], NOW)]

    summary = summarize_sales(orders, TimeRange.ALL, now=NOW)

    assert summary.revenue == 59_000
    assert summary.revenue_progress == 100.0


def test_window_bounds_use_local_midnight() -> None:
    moscow = ZoneInfo("Europe/Moscow")
    start, end = window_bounds(TimeRange.YESTERDAY, NOW, moscow)

    assert start == datetime(2026, 3, 9, 0, 0, tzinfo=moscow)
    assert end == datetime(2026, 3, 10, 0, 0, tzinfo=moscow)
    assert window_bounds(TimeRange.ALL, NOW) == (None, None)
    assert window_bounds(TimeRange.MONTH, NOW)[0] == datetime(2026, 3, 1, tzinfo=timezone.utc)


def test_filter_orders_by_range(catalog: Catalog) -> None:
    today = _order(catalog, 1, [("p8", 1)], NOW - timedelta(hours=1))
    yesterday = _order(catalog, 2, [("p8", 1)], NOW - timedelta(days=1))
    last_month = _order(catalog, 3, [("p8", 1)], NOW - timedelta(days=20))
    orders = [today, yesterday, last_month]

    assert filter_orders(orders, TimeRange.TODAY, NOW) == [today]
    assert filter_orders(orders, TimeRange.YESTERDAY, NOW) == [yesterday]
    assert filter_orders(orders, TimeRange.WEEK, NOW) == [today, yesterday]
    assert filter_orders(orders, TimeRange.ALL, NOW) == orders


def test_hourly_buckets_follow_local_hour(catalog: Catalog) -> None:
    moscow = ZoneInfo("Europe/Moscow")
    noon_local = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)
    six_local = datetime(2026, 3, 10, 3, 0, tzinfo=timezone.utc)
    orders = [
        _order(catalog, 1, [("p1", 1)], noon_local),
        _order(catalog, 2, [("p1", 1)], six_local),
    ]

    buckets = {bucket.hour: bucket for bucket in hourly_buckets(orders, moscow)}

    assert buckets[12].revenue == 490
    assert buckets[12].orders == 1
    assert buckets[12].label == "12:00"
    assert 6 not in buckets
    assert sum(bucket.revenue for bucket in buckets.values()) == 490


def test_top_products_are_limited_and_stable(catalog: Catalog) -> None:
    order = _order(
        catalog,
        1,
        [("p1", 3), ("p2", 1), ("p3", 1), ("p4", 1), ("p5", 1), ("p6", 1), ("p8", 2)],
        NOW,
    )

    ranked = top_products([order])

    assert [product.name for product in ranked] == [
        'Grand Beef "Maestro"',
        "Cola Zero",
        "Cheeseburger Junior",
        "Spicy Chicken Tower",
        "Caesar Roll XL",
    ]
    assert ranked[0].revenue == 1470
