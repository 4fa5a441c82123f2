from __future__ import annotations

from typing import Protocol


class InsightsGenerator(Protocol):
    def generate(self, summary_text: str) -> str: ...
