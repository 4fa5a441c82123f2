from __future__ import annotations

from dataclasses import replace

from rpos.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from rpos.domain.common.ids import OrderId
from rpos.domain.order.entities import Order
from rpos.infrastructure.memory.store import InMemoryStore


class InMemoryOrderRepository(OrderRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, order: Order) -> None:
        with self._store.lock:
            if any(existing.order_id == order.order_id for existing in self._store.orders):
                raise ValueError(f"order {order.order_id} already exists")
            self._store.orders.insert(0, order)

    def get(self, order_id: OrderId) -> Order | None:
        with self._store.lock:
            for order in self._store.orders:
                if order.order_id == order_id:
                    return order
        return None

    def list_all(self) -> list[Order]:
        with self._store.lock:
            return list(self._store.orders)

    def update_with_version(self, order: Order, expected_version: int) -> Order:
        with self._store.lock:
            for index, current in enumerate(self._store.orders):
                if current.order_id != order.order_id:
                    continue
                if current.version != expected_version:
                    raise OptimisticConcurrencyError(
                        f"order {order.order_id} version mismatch: "
                        f"expected={expected_version}, actual={current.version}"
                    )
                persisted = replace(order, version=current.version + 1)
                self._store.orders[index] = persisted
                return persisted
        raise OptimisticConcurrencyError(f"order {order.order_id} no longer exists")
