from datetime import datetime, timezone

from halal_deal.domain.ports import AnalyticsSnapshot, AnalyticsStore


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def empty_snapshot() -> AnalyticsSnapshot:
    return {"financing_methods": {}, "total_calculations": 0, "last_updated": utc_now_iso()}


def bump(snapshot: AnalyticsSnapshot, method: str) -> AnalyticsSnapshot:
    counts = dict(snapshot["financing_methods"])
    counts[method] = counts.get(method, 0) + 1
    return {
        "financing_methods": counts,
        "total_calculations": snapshot["total_calculations"] + 1,
        "last_updated": utc_now_iso(),
    }


class InMemoryAnalyticsStore(AnalyticsStore):
    def __init__(self) -> None:
        self._data: AnalyticsSnapshot = empty_snapshot()

    def increment(self, method: str) -> AnalyticsSnapshot:
        self._data = bump(self._data, method)
        return self.snapshot()

    def snapshot(self) -> AnalyticsSnapshot:
        return {
            "financing_methods": dict(self._data["financing_methods"]),
            "total_calculations": self._data["total_calculations"],
            "last_updated": self._data["last_updated"],
        }

    def clear(self) -> None:
        self._data = empty_snapshot()
