import json
from pathlib import Path

import pandas as pd

from halal_deal.adapters.memory_repo import InMemoryAnalyticsStore, bump, empty_snapshot
from halal_deal.domain.ports import AnalyticsSnapshot, AnalyticsStore


def read_df(path: str) -> pd.DataFrame:
    if path.endswith(".parquet"):
        return pd.read_parquet(path)
    return pd.read_csv(path)


def write_df(df: pd.DataFrame, path: str):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if path.endswith(".parquet"):
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)


class JsonFileAnalyticsStore(AnalyticsStore):
    """
    Analytics counters kept in a single JSON document.

    A missing or unreadable file reads as an empty snapshot, so a corrupt
    file never blocks a calculation; the next increment rewrites it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> AnalyticsSnapshot:
        if not self.path.exists():
            return empty_snapshot()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return empty_snapshot()
        if not isinstance(data, dict):
            return empty_snapshot()
        methods = data.get("financing_methods")
        try:
            return {
                "financing_methods": {str(k): int(v) for k, v in methods.items()} if isinstance(methods, dict) else {},
                "total_calculations": int(data.get("total_calculations") or 0),
                "last_updated": str(data.get("last_updated") or empty_snapshot()["last_updated"]),
            }
        except (TypeError, ValueError):
            return empty_snapshot()

    def _save(self, snapshot: AnalyticsSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")

    def increment(self, method: str) -> AnalyticsSnapshot:
        updated = bump(self._load(), method)
        self._save(updated)
        return updated

    def snapshot(self) -> AnalyticsSnapshot:
        return self._load()

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def build_analytics_store(path: str | None) -> AnalyticsStore:
    if path:
        return JsonFileAnalyticsStore(path)
    return InMemoryAnalyticsStore()
