"""
Tests for ledger/points_ledger.py and ledger/store.py.

Uses MemoryStore for balance arithmetic and JsonFileStore under tmp_path for
persistence.
"""

import json
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from kanban_tasks.config import BoardSettings
from kanban_tasks.ledger.points_ledger import BALANCE_KEY, PointsLedger, complete_task
from kanban_tasks.ledger.store import JsonFileStore, MemoryStore
from kanban_tasks.parsers.task_parser import parse_task


@pytest.fixture
def ledger():
    return PointsLedger(MemoryStore())


# ---------------------------------------------------------------------------
# Balance arithmetic
# ---------------------------------------------------------------------------

class TestBalance:
    def test_starts_at_zero(self, ledger):
        assert ledger.balance == 0

    def test_save_and_load(self, ledger):
        ledger.save(100)
        assert ledger.load() == 100

    def test_add(self, ledger):
        ledger.save(10)
        ledger.add(5)
        assert ledger.balance == 15

    def test_multiple_additions(self, ledger):
        ledger.add(10)
        ledger.add(20)
        ledger.add(5)
        assert ledger.balance == 35

    def test_subtract(self, ledger):
        ledger.save(50)
        ledger.subtract(20)
        assert ledger.balance == 30

    def test_subtract_clamps_at_zero(self, ledger):
        ledger.save(10)
        ledger.subtract(20)
        assert ledger.balance == 0

    def test_multiple_subtractions(self, ledger):
        ledger.save(100)
        ledger.subtract(10)
        ledger.subtract(20)
        ledger.subtract(30)
        assert ledger.balance == 40

    def test_apply_signed(self, ledger):
        ledger.apply(12)
        ledger.apply(-5)
        assert ledger.balance == 7
        ledger.apply(-100)
        assert ledger.balance == 0

    def test_reset(self, ledger):
        ledger.save(100)
        ledger.reset()
        assert ledger.balance == 0
        assert ledger.load() == 0


class TestLoad:
    def test_loads_existing_value(self):
        ledger = PointsLedger(MemoryStore({BALANCE_KEY: "42"}))
        assert ledger.balance == 42

    def test_invalid_value_loads_as_zero(self):
        ledger = PointsLedger(MemoryStore({BALANCE_KEY: "lots"}))
        assert ledger.balance == 0


# ---------------------------------------------------------------------------
# JsonFileStore
# ---------------------------------------------------------------------------

class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "state" / "points.json"
        PointsLedger(JsonFileStore(path)).add(25)

        assert json.loads(path.read_text(encoding="utf-8")) == {BALANCE_KEY: "25"}
        assert PointsLedger(JsonFileStore(path)).balance == 25

    def test_missing_file_reads_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "missing.json")
        assert store.get(BALANCE_KEY) is None

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text("{not json", encoding="utf-8")
        assert PointsLedger(JsonFileStore(path)).balance == 0

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text(json.dumps({"other": "value"}), encoding="utf-8")
        JsonFileStore(path).set(BALANCE_KEY, "3")
        assert json.loads(path.read_text(encoding="utf-8")) == {"other": "value", BALANCE_KEY: "3"}

    def test_clear(self, tmp_path):
        path = tmp_path / "points.json"
        store = JsonFileStore(path)
        store.set(BALANCE_KEY, "3")
        store.clear()
        assert not path.exists()


# ---------------------------------------------------------------------------
# complete_task
# ---------------------------------------------------------------------------

class TestCompleteTask:
    def test_completion_awards_points(self, ledger):
        task = parse_task("- [ ] помыть посуду $5 #tag", BoardSettings())
        delta = complete_task(task, True, ledger, on=date(2025, 10, 2))
        assert delta == 5
        assert ledger.balance == 5
        assert task.serialise() == "- [x] помыть посуду $5 ✅ 2025-10-02 #tag"

    def test_reopening_takes_points_back(self, ledger):
        ledger.save(8)
        task = parse_task("- [x] Done $5 ✅ 2025-10-02", BoardSettings())
        assert complete_task(task, False, ledger) == -5
        assert ledger.balance == 3

    def test_reopening_clamps_at_zero(self, ledger):
        task = parse_task("- [x] Done $5", BoardSettings())
        complete_task(task, False, ledger)
        assert ledger.balance == 0

    def test_no_change_no_points(self, ledger):
        task = parse_task("- [x] Done $5", BoardSettings())
        assert complete_task(task, True, ledger) == 0
        assert ledger.balance == 0

    def test_task_without_points(self, ledger):
        task = parse_task("- [ ] Plain", BoardSettings())
        assert complete_task(task, True, ledger) == 0
        assert task.done is True
        assert ledger.balance == 0

    def test_zero_points(self, ledger):
        task = parse_task("- [ ] Free $0", BoardSettings())
        assert complete_task(task, True, ledger) == 0

    def test_without_ledger(self):
        task = parse_task("- [ ] Task $4", BoardSettings())
        assert complete_task(task, True, None) == 4
        assert task.done is True
