from __future__ import annotations

from typing import Protocol

from rpos.domain.cart.entities import Cart
from rpos.domain.common.ids import OrderId
from rpos.domain.order.entities import Order


class CartRepository(Protocol):
    def get(self) -> Cart: ...

    def save(self, cart: Cart, expected_version: int) -> Cart: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_all(self) -> list[Order]: ...

    def update_with_version(self, order: Order, expected_version: int) -> Order: ...


class OptimisticConcurrencyError(Exception):
    pass
