from __future__ import annotations

from rpos.application.ports.repositories import CartRepository, OptimisticConcurrencyError
from rpos.domain.cart.entities import Cart
from rpos.infrastructure.memory.store import InMemoryStore


class InMemoryCartRepository(CartRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get(self) -> Cart:
        with self._store.lock:
            return self._store.cart

    def save(self, cart: Cart, expected_version: int) -> Cart:
        with self._store.lock:
            current = self._store.cart
            if current.version != expected_version:
                raise OptimisticConcurrencyError(
                    f"cart version mismatch: expected={expected_version}, actual={current.version}"
                )
            self._store.cart = cart
            return cart
