"""
Points balance earned by completing tasks.

Tasks may carry a reward (``$5``). When board code completes a task the
reward is added to the balance; reopening the task takes it back. The
balance never goes below zero.
"""

import logging
import threading
from datetime import date
from typing import Optional

from kanban_tasks.models.task import Task

log = logging.getLogger(__name__)

BALANCE_KEY = "task-kanban-points-balance"


class PointsLedger:
    """Running points balance persisted to a key-value store."""

    def __init__(self, store, key: str = BALANCE_KEY):
        self._store = store
        self._key = key
        self._lock = threading.RLock()
        self._balance = 0
        self.load()

    @property
    def balance(self) -> int:
        return self._balance

    def load(self) -> int:
        """Reload the balance from the store. Bad values load as zero."""
        with self._lock:
            raw = self._store.get(self._key)
            balance = 0
            if raw:
                try:
                    balance = int(raw)
                except ValueError:
                    log.warning("Ignoring invalid points balance %r", raw)
            self._balance = balance
            return balance

    def save(self, balance: int) -> None:
        with self._lock:
            self._store.set(self._key, str(balance))
            self._balance = balance

    def add(self, points: int) -> int:
        with self._lock:
            self.save(self._balance + points)
            return self._balance

    def subtract(self, points: int) -> int:
        with self._lock:
            self.save(max(0, self._balance - points))
            return self._balance

    def apply(self, delta: int) -> int:
        """Apply a signed change: positive adds, negative subtracts (clamped)."""
        if delta >= 0:
            return self.add(delta)
        return self.subtract(-delta)

    def reset(self) -> None:
        self.save(0)


def complete_task(
    task: Task,
    done: bool,
    ledger: Optional[PointsLedger],
    on: Optional[date] = None,
) -> int:
    """
    Set a task's done state and settle its reward.

    The ledger is only touched when the state actually changes and the task
    carries points. Returns the signed delta that was applied.
    """
    was_done = task.done
    task.set_done(done, on=on)
    if was_done == task.done or not task.points:
        return 0

    delta = task.points if task.done else -task.points
    if ledger is not None:
        ledger.apply(delta)
        log.info("Applied %+d points for %r (balance %d)", delta, task.content, ledger.balance)
    return delta
