from __future__ import annotations

import itertools
import threading
from uuid import uuid4

from rpos.domain.common.ids import OrderId


class OrderIdGenerator:
    """Issues ``ord_<sequence>_<random>`` ids.

    The sequence is monotonic for the life of the process, so ids never repeat
    within a session; the random suffix keeps ids from separate runs apart.
    """

    def __init__(self, start: int = 1) -> None:
        self._sequence = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> OrderId:
        with self._lock:
            sequence = next(self._sequence)
        return OrderId(f"ord_{sequence:06d}_{uuid4().hex[:8]}")
