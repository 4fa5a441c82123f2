from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol


class UnitOfWork(Protocol):
    def atomic(self) -> AbstractContextManager[Any]: ...
