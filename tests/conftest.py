"""
Pytest configuration and fixtures.
Replaces the Supabase client with an in-memory table so tests never hit the network.
"""

from __future__ import annotations

import itertools
from datetime import date

import pytest

from db.models import Reservation
from reservation_desk.notices import Notifier
from reservation_desk.state import AppState
from reservation_desk.store import ReservationStore

TODAY = date(2025, 3, 10)


class FakeAPIError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, table, op, payload=None):
        self.table = table
        self.op = op
        self.payload = payload
        self.filters = []
        self.orders = []

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        client = self.table.client
        client.calls.append((self.table.name, self.op))
        if self.op in client.fail_on:
            raise FakeAPIError(client.fail_on[self.op])

        if self.op == "select":
            rows = [dict(r) for r in self.table.rows]
            for column, desc in reversed(self.orders):
                rows.sort(key=lambda r: r[column], reverse=desc)
            return FakeResponse(rows)

        if self.op == "insert":
            inserted = []
            for row in self.payload:
                new = dict(row, id=str(next(self.table.ids)), created_at=f"2025-01-01T00:00:{len(self.table.rows):02d}")
                self.table.rows.append(new)
                inserted.append(dict(new))
            return FakeResponse(inserted)

        if self.op == "update":
            updated = []
            for row in self.table.rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self.op == "delete":
            removed = [r for r in self.table.rows if self._matches(r)]
            self.table.rows = [r for r in self.table.rows if not self._matches(r)]
            return FakeResponse(removed)

        raise AssertionError(f"unexpected op {self.op}")


class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.rows = []
        self.ids = itertools.count(1)

    def select(self, columns="*"):
        return FakeQuery(self, "select")

    def insert(self, rows):
        return FakeQuery(self, "insert", rows)

    def update(self, values):
        return FakeQuery(self, "update", values)

    def delete(self):
        return FakeQuery(self, "delete")


class FakeSupabaseClient:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.fail_on = {}

    def table(self, name):
        if name not in self.tables:
            self.tables[name] = FakeTable(self, name)
        return self.tables[name]

    def seed(self, *reservations, name="reservations"):
        table = self.table(name)
        for r in reservations:
            row = dict(r.to_row(), id=r.id or str(next(table.ids)), created_at=r.created_at)
            table.rows.append(row)


def make_reservation(date="2025-03-10", time="11:00", deceased="Lee", contractor="Kim", staff="Park", **kw):
    return Reservation(
        contractor_name=contractor,
        deceased_name=deceased,
        date=date,
        time=time,
        staff_name=staff,
        **kw,
    )


@pytest.fixture
def client():
    return FakeSupabaseClient()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def store(client, notifier):
    return ReservationStore(client, notifier)


@pytest.fixture
def app_state():
    return AppState.initial(TODAY)
