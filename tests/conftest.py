import copy
import itertools
import os
import threading
import uuid

import pytest

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from formbuilder.config import Settings, get_settings
from formbuilder.main import app
from formbuilder.services.form_store import FormStore, get_form_store

FRONTEND_URL = "http://forms.test"


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeDatabase:
    """In-memory stand-in for the forms and form_submissions tables."""

    def __init__(self):
        self.tables = {"forms": [], "form_submissions": []}
        self.lock = threading.Lock()
        self.sequence = itertools.count(1)
        self.next_insert_error = None

    def insert(self, table, payload):
        if self.next_insert_error is not None:
            error, self.next_insert_error = self.next_insert_error, None
            raise error

        row = copy.deepcopy(payload)
        if table == "forms":
            if any(r["share_token"] == row["share_token"] for r in self.tables["forms"]):
                raise APIError({
                    "message": 'duplicate key value violates unique constraint "forms_share_token_key"',
                    "code": "23505",
                    "hint": None,
                    "details": None,
                })
            row["id"] = str(uuid.uuid4())
        else:
            row["id"] = next(self.sequence)
        row["created_at"] = next(self.sequence)
        self.tables[table].append(row)
        return copy.deepcopy(row)


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.payload = None
        self.columns = "*"
        self.filters = []
        self.ordering = None
        self.row_limit = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def execute(self):
        with self.db.lock:
            if self.payload is not None:
                return FakeResponse([self.db.insert(self.table, self.payload)])

            rows = [
                r for r in self.db.tables[self.table]
                if all(r.get(column) == value for column, value in self.filters)
            ]
            if self.ordering:
                column, desc = self.ordering
                rows = sorted(rows, key=lambda r: r[column], reverse=desc)
            if self.row_limit is not None:
                rows = rows[:self.row_limit]
            if self.columns != "*":
                keys = [c.strip() for c in self.columns.split(",")]
                rows = [{k: r.get(k) for k in keys} for r in rows]
            return FakeResponse(copy.deepcopy(rows))


class FakeSupabase:
    def __init__(self):
        self.db = FakeDatabase()

    def table(self, name):
        return FakeQuery(self.db, name)


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def store(supabase):
    return FormStore(supabase)


@pytest.fixture
def settings():
    return Settings(
        supabase_url="http://localhost:54321",
        supabase_service_role_key="test-service-role-key",
        frontend_url=FRONTEND_URL,
    )


@pytest.fixture
def api(store, settings):
    app.dependency_overrides[get_form_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
