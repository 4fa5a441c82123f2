from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from typing import Any

from rpos.domain.cart.entities import Cart
from rpos.domain.order.entities import Order


class InMemoryStore:
    """Single owner of the session's cart and order list.

    Every read and write goes through ``lock``; repositories built on the same store
    share it, so ``atomic()`` spans cart and order changes together.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.cart = Cart()
        self.orders: list[Order] = []

    def atomic(self) -> AbstractContextManager[Any]:
        return self.lock
