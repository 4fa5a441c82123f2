from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rpos.application.ports.clock import Clock
from rpos.application.ports.insights import InsightsGenerator
from rpos.domain.catalog.entities import Catalog
from rpos.domain.order.identity import OrderIdGenerator
from rpos.infrastructure.ai.gemini_client import GeminiInsightsClient
from rpos.infrastructure.catalog.static_catalog import build_catalog
from rpos.infrastructure.clock import SystemClock
from rpos.infrastructure.memory.cart_repo import InMemoryCartRepository
from rpos.infrastructure.memory.order_repo import InMemoryOrderRepository
from rpos.infrastructure.memory.store import InMemoryStore
from rpos.infrastructure.messaging.local_event_bus import LocalEventBus
from rpos.tools.seed import seed_demo_orders

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_TIMEZONE = "Europe/Moscow"
_TRUTHY = {"1", "true", "yes", "on"}


def business_timezone() -> tzinfo:
    name = os.getenv("BUSINESS_TIMEZONE", DEFAULT_BUSINESS_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("business_timezone_unavailable_using_utc", extra={"reason": name})
        return timezone.utc


@dataclass
class Container:
    """Process-wide wiring shared by every request handler."""

    catalog: Catalog
    store: InMemoryStore
    cart_repository: InMemoryCartRepository
    order_repository: InMemoryOrderRepository
    event_bus: LocalEventBus
    clock: Clock
    insights: InsightsGenerator
    tz: tzinfo
    id_generator: OrderIdGenerator = field(default_factory=OrderIdGenerator)


def build_container(
    clock: Clock | None = None,
    insights: InsightsGenerator | None = None,
    seed_demo: bool | None = None,
) -> Container:
    store = InMemoryStore()
    container = Container(
        catalog=build_catalog(),
        store=store,
        cart_repository=InMemoryCartRepository(store),
        order_repository=InMemoryOrderRepository(store),
        event_bus=LocalEventBus(),
        clock=clock or SystemClock(),
        insights=insights or GeminiInsightsClient(),
        tz=business_timezone(),
    )

    if seed_demo is None:
        seed_demo = os.getenv("SEED_DEMO_ORDERS", "").strip().lower() in _TRUTHY
    if seed_demo:
        seed_demo_orders(
            catalog=container.catalog,
            order_repository=container.order_repository,
            id_generator=container.id_generator,
            now=container.clock.now(),
        )
    return container
