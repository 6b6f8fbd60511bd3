"""
Shared test fixtures and utilities for the DailyMenu test suite.

InMemoryDocumentStore stands in for the MongoDB collection: same get/set/
update/delete/scan/batch surface, dot-path updates, atomic batches, and
switches to make reads, writes or commits fail.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.exceptions import MissingDocumentError, StoreError
from core.utils.clock import FixedClock
from repositories import DayDocumentRepository

# 2026-02-15 09:00 UTC, a Sunday
NOW = datetime(2026, 2, 15, 9, 0, tzinfo=timezone.utc)


def _set_path(doc: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[parts[-1]] = copy.deepcopy(value)


class InMemoryWriteBatch:
    def __init__(self, store: "InMemoryDocumentStore"):
        self.store = store
        self.ops: List[tuple] = []

    def __len__(self) -> int:
        return len(self.ops)

    def delete(self, key: str) -> None:
        self.ops.append(("delete", key, None))

    def set(self, key: str, data: Dict[str, Any]) -> None:
        self.ops.append(("set", key, copy.deepcopy(data)))

    def update(self, key: str, fields: Dict[str, Any]) -> None:
        self.ops.append(("update", key, copy.deepcopy(fields)))

    def commit(self) -> None:
        self.store.calls.append("commit")
        if self.store.fail_commits:
            raise StoreError("simulated commit failure")
        docs = copy.deepcopy(self.store.docs)
        for op, key, data in self.ops:
            if op == "delete":
                docs.pop(key, None)
            elif op == "set":
                docs[key] = data
            else:
                if key not in docs:
                    raise MissingDocumentError(key)
                for path, value in data.items():
                    _set_path(docs[key], path, value)
        self.store.docs = docs
        self.store.committed.append(list(self.ops))


class InMemoryDocumentStore:
    def __init__(self, docs: Optional[Dict[str, Dict[str, Any]]] = None):
        self.docs: Dict[str, Dict[str, Any]] = copy.deepcopy(docs or {})
        self.calls: List[str] = []
        self.committed: List[List[tuple]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.fail_commits = False

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get")
        if self.fail_reads:
            raise StoreError("simulated read failure", key=key)
        doc = self.docs.get(key)
        return copy.deepcopy(doc) if doc is not None else None

    def set(self, key: str, data: Dict[str, Any]) -> None:
        self.calls.append("set")
        if self.fail_writes:
            raise StoreError("simulated write failure", key=key)
        self.docs[key] = copy.deepcopy(data)

    def update(self, key: str, fields: Dict[str, Any]) -> None:
        self.calls.append("update")
        if self.fail_writes:
            raise StoreError("simulated write failure", key=key)
        if key not in self.docs:
            raise MissingDocumentError(key)
        for path, value in fields.items():
            _set_path(self.docs[key], path, value)

    def delete(self, key: str) -> None:
        self.calls.append("delete")
        if self.fail_writes:
            raise StoreError("simulated write failure", key=key)
        self.docs.pop(key, None)

    def scan(self):
        self.calls.append("scan")
        if self.fail_reads:
            raise StoreError("simulated scan failure")
        for key, doc in list(self.docs.items()):
            yield key, copy.deepcopy(doc)

    def batch(self) -> InMemoryWriteBatch:
        self.calls.append("batch")
        return InMemoryWriteBatch(self)


def make_meal(name: str = "Oatmeal", calories: float = 350, **extra) -> Dict[str, Any]:
    meal = {
        "item_name": name,
        "ingredients": ["oats", "milk"],
        "recipe_url": "",
        "image_url": "",
        "calories": calories,
        "prep_time_minutes": 10,
        "is_vegetarian": True,
    }
    meal.update(extra)
    return meal


def make_day(date: str, **overrides) -> Dict[str, Any]:
    """Raw stored day document, the way it sits in the collection"""
    doc = {
        "date": date,
        "day_of_week": "",
        "breakfast": make_meal("Oatmeal", 350),
        "lunch": make_meal("Lentil soup", 500),
        "dinner": make_meal("Grilled salmon", 650, is_vegetarian=False),
        "total_calories": 1500,
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repo(store, clock) -> DayDocumentRepository:
    return DayDocumentRepository(store, clock)


@pytest.fixture
def api(store, clock):
    """TestClient wired to the in-memory store and fixed clock"""
    from main import app
    from api.dependencies import get_clock, get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
