"""Pytest configuration and shared fixtures"""
import asyncio

import pytest

from modelboard.api.schemas import ModelRecord


class FakeModelStore:
    """In-memory stand-in for the remote model store that records every call."""

    def __init__(self, records=None):
        self.records = [dict(r) for r in (records or [])]
        self.calls = []
        self.failures = {}
        self._next_id = max([r["id"] for r in self.records] or [0]) + 1

    def fail_next(self, operation, error):
        """Make the next call of `operation` raise `error`."""
        self.failures[operation] = error

    def count(self, operation):
        return sum(1 for call in self.calls if call[0] == operation)

    def _maybe_fail(self, operation):
        if operation in self.failures:
            raise self.failures.pop(operation)

    async def list_models(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return tuple(ModelRecord.model_validate(r) for r in self.records)

    async def create_model(self, draft):
        self.calls.append(("create", draft.model_name))
        self._maybe_fail("create")
        self.records.append({"id": self._next_id, **draft.model_dump()})
        self._next_id += 1

    async def update_model(self, model_id, draft):
        self.calls.append(("update", model_id))
        self._maybe_fail("update")
        self.records = [
            {"id": r["id"], **draft.model_dump()} if r["id"] == model_id else r
            for r in self.records
        ]

    async def delete_model(self, model_id):
        self.calls.append(("delete", model_id))
        self._maybe_fail("delete")
        self.records = [r for r in self.records if r["id"] != model_id]


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


@pytest.fixture
def sample_records():
    """Model records as the store returns them (metrics as strings)"""
    return [
        {"id": 1, "model_name": "RF", "accuracy": "0.95", "precision": "0.92",
         "recall": "0.93", "f1_score": "0.925"},
        {"id": 2, "model_name": "XGBoost", "accuracy": "0.97", "precision": "0.96",
         "recall": "0.95", "f1_score": "0.955"},
        {"id": 3, "model_name": "KNN", "accuracy": "0.88", "precision": "0.85",
         "recall": "0.86", "f1_score": "0.855"},
    ]


@pytest.fixture
def store(sample_records):
    return FakeModelStore(sample_records)


@pytest.fixture
def empty_store():
    return FakeModelStore()

