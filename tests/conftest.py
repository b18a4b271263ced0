from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

# Ensure required settings are present during test collection.
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")


class _InsertQuery:
    def __init__(self, table: "_TableStub", payload: dict):
        self.table = table
        self.payload = payload

    def execute(self):
        if self.table.fail_with is not None:
            raise self.table.fail_with
        self.table.rows.append(self.payload)
        row_id = f"row-{len(self.table.rows)}"
        return SimpleNamespace(data=[{**self.payload, "id": row_id}])


class _TableStub:
    def __init__(self):
        self.rows: list[dict] = []
        self.fail_with: Exception | None = None

    def insert(self, payload: dict):
        return _InsertQuery(self, payload)


class ClientStub:
    def __init__(self):
        self.submissions = _TableStub()

    def table(self, table_name: str):
        if table_name != "submissions":
            raise AssertionError(f"Unexpected table: {table_name}")
        return self.submissions


@pytest.fixture
def store_client() -> ClientStub:
    return ClientStub()
