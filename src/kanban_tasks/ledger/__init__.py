from .points_ledger import BALANCE_KEY, PointsLedger, complete_task
from .store import JsonFileStore, MemoryStore

__all__ = [
    "BALANCE_KEY",
    "JsonFileStore",
    "MemoryStore",
    "PointsLedger",
    "complete_task",
]
