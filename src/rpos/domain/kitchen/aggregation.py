from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Sequence

from rpos.domain.order.entities import TERMINAL_STATUSES, Order, OrderStatus

CRITICAL_MINUTES = 15
WARNING_MINUTES = 10

_STATIONS: dict[str, str] = {
    "Burgers": "GRILL",
    "Combo": "GRILL",
    "Snacks": "FRYER",
    "Drinks": "DRINK",
}


class Urgency(str, Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    DONE = "DONE"


@dataclass(frozen=True)
class KitchenTicket:
    order: Order
    elapsed_minutes: int
    urgency: Urgency


@dataclass(frozen=True)
class ProductionItem:
    name: str
    count: int
    station: str


@dataclass(frozen=True)
class KitchenCounters:
    pending: int
    cooking: int
    ready: int


@dataclass(frozen=True)
class KitchenBoard:
    tickets: tuple[KitchenTicket, ...]
    production: tuple[ProductionItem, ...]
    counters: KitchenCounters
    generated_at: datetime


def station_for_category(category: str) -> str:
    return _STATIONS.get(category, "COLD")


def elapsed_minutes(order: Order, now: datetime) -> int:
    return max((now - order.created_at) // timedelta(minutes=1), 0)


def classify_urgency(minutes: int) -> Urgency:
    if minutes >= CRITICAL_MINUTES:
        return Urgency.CRITICAL
    if minutes >= WARNING_MINUTES:
        return Urgency.WARNING
    return Urgency.NORMAL


def ticket_urgency(order: Order, now: datetime) -> Urgency:
    if order.status == OrderStatus.READY:
        return Urgency.DONE
    return classify_urgency(elapsed_minutes(order, now))


def active_queue(orders: Iterable[Order]) -> list[Order]:
    """Non-terminal orders, oldest first. Ties keep their input order."""
    active = [order for order in orders if order.status not in TERMINAL_STATUSES]
    return sorted(active, key=lambda order: order.created_at)


def production_aggregate(orders: Iterable[Order]) -> list[ProductionItem]:
    counts: dict[str, int] = {}
    stations: dict[str, str] = {}
    for order in orders:
        if order.status in TERMINAL_STATUSES or order.status == OrderStatus.READY:
            continue
        for line in order.lines:
            name = line.product.name
            if name not in counts:
                counts[name] = 0
                stations[name] = station_for_category(line.product.category)
            counts[name] += line.quantity

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ProductionItem(name=name, count=count, station=stations[name]) for name, count in ranked]


def count_by_status(orders: Sequence[Order]) -> KitchenCounters:
    return KitchenCounters(
        pending=sum(1 for order in orders if order.status == OrderStatus.PENDING),
        cooking=sum(1 for order in orders if order.status == OrderStatus.COOKING),
        ready=sum(1 for order in orders if order.status == OrderStatus.READY),
    )


def build_kitchen_board(orders: Iterable[Order], now: datetime) -> KitchenBoard:
    queue = active_queue(orders)
    tickets = tuple(
        KitchenTicket(
            order=order,
            elapsed_minutes=elapsed_minutes(order, now),
            urgency=ticket_urgency(order, now),
        )
        for order in queue
    )
    return KitchenBoard(
        tickets=tickets,
        production=tuple(production_aggregate(queue)),
        counters=count_by_status(queue),
        generated_at=now,
    )
