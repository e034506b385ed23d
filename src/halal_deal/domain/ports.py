# src/halal_deal/domain/ports.py
from __future__ import annotations

from typing import Protocol, TypedDict


# ----------------------------
# Analytics counters
# ----------------------------

class AnalyticsSnapshot(TypedDict):
    financing_methods: dict[str, int]
    total_calculations: int
    last_updated: str


class AnalyticsStore(Protocol):
    def increment(self, method: str) -> AnalyticsSnapshot:
        ...

    def snapshot(self) -> AnalyticsSnapshot:
        ...

    def clear(self) -> None:
        ...
