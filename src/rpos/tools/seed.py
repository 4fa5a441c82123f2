from __future__ import annotations

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from rpos.application.ports.repositories import OrderRepository
from rpos.application.use_cases.cart import resolve_modifiers
from rpos.domain.cart.entities import Cart
from rpos.domain.catalog.entities import Catalog
from rpos.domain.common.ids import CartLineId, ProductId
from rpos.domain.order.entities import Order, PaymentMethod, create_pending_order
from rpos.domain.order.identity import OrderIdGenerator

logger = logging.getLogger(__name__)

DEMO_ORDERS = (
    {
        "customer_name": "Alex",
        "items": (("p1", 1), ("p5", 1)),
        "minutes_ago": 10,
        "payment_method": PaymentMethod.CARD,
        "advance": True,
    },
    {
        "customer_name": "Anna",
        "items": (("p3", 2),),
        "minutes_ago": 2,
        "payment_method": PaymentMethod.CASH,
        "advance": False,
    },
)


def _demo_cart(catalog: Catalog, items: tuple[tuple[str, int], ...]) -> Cart:
    cart = Cart()
    for product_id, quantity in items:
        product = catalog.get_product(ProductId(product_id))
        if product is None:
            raise ValueError(f"demo product {product_id} missing from catalog")
        cart = cart.add(
            line_id=CartLineId(f"crt_{uuid4().hex[:12]}"),
            product=product,
            modifiers=resolve_modifiers(catalog, product, []),
            quantity=quantity,
        )
    return cart


def seed_demo_orders(
    catalog: Catalog,
    order_repository: OrderRepository,
    id_generator: OrderIdGenerator,
    now: datetime,
) -> list[Order]:
    """Place the demo orders a fresh kitchen board starts with: one cooking, one pending."""
    seeded: list[Order] = []
    for demo in DEMO_ORDERS:
        created_at = now - timedelta(minutes=demo["minutes_ago"])
        order = create_pending_order(
            order_id=id_generator.next_id(),
            cart=_demo_cart(catalog, demo["items"]),
            customer_name=demo["customer_name"],
            now=created_at,
            payment_method=demo["payment_method"],
        )
        if demo["advance"]:
            order = order.advance(created_at)
        order_repository.add(order)
        seeded.append(order)

    logger.info("demo_orders_seeded", extra={"action": "seed"})
    return seeded
