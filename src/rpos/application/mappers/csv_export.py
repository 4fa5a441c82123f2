from __future__ import annotations

import csv
import io
from datetime import timezone, tzinfo
from typing import Iterable

from rpos.domain.order.entities import Order

CSV_HEADERS = ["Order ID", "Time", "Customer", "Items", "Total", "Status"]


def _items_cell(order: Order) -> str:
    return "; ".join(f"{line.quantity}x {line.product.name}" for line in order.lines)


def render_orders_csv(orders: Iterable[Order], tz: tzinfo = timezone.utc) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for order in orders:
        writer.writerow(
            [
                str(order.order_id),
                order.created_at.astimezone(tz).strftime("%H:%M:%S"),
                order.customer_name,
                _items_cell(order),
                order.total_amount,
                order.status.value,
            ]
        )
    return buffer.getvalue()
