"""
Shared fixtures: an in-memory stand-in for the psycopg2 pool.

The fake understands exactly the statements the repositories issue and keeps
the four tables as lists of dicts, so tests can assert on stored rows.
"""

import re
from datetime import datetime, timedelta

import psycopg2
import pytest

from repositories.need_repo import NEED_COLUMNS, NeedRepository
from repositories.organization_repo import BASE_ORGANIZATION_COLUMNS


def _normalize(sql: str) -> str:
    return " ".join(sql.split()).lower().rstrip(";").strip()


class FakeDatabase:
    """Tables plus the log of every executed statement."""

    def __init__(self):
        self.categories = []
        self.organizations = []
        self.needs = []
        self.needs_images = []
        self.executed = []
        self.fail_on = None
        self._ids = {"categories": 0, "organizations": 0, "needs": 0, "needs_images": 0}
        self._clock = datetime(2026, 1, 1, 12, 0, 0)

    def now(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def next_id(self, table: str) -> int:
        self._ids[table] += 1
        return self._ids[table]

    def add_category(self, name: str, slug: str) -> int:
        cid = self.next_id("categories")
        self.categories.append({"id": cid, "name": name, "slug": slug})
        return cid

    def add_organization(self, name: str, slug: str, **extra) -> int:
        oid = self.next_id("organizations")
        row = {col: None for col in BASE_ORGANIZATION_COLUMNS}
        row.update(id=oid, name=name, slug=slug, email=f"{slug}@example.org", **extra)
        self.organizations.append(row)
        return oid

    def find(self, table: str, row_id: int):
        return next((r for r in getattr(self, table) if r["id"] == row_id), None)


class FakeCursor:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self.rowcount = -1
        self._result = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def execute(self, sql, params=()):
        stmt = _normalize(sql)
        self.db.executed.append(stmt)
        if self.db.fail_on and stmt.startswith(self.db.fail_on):
            raise psycopg2.OperationalError("connection lost")
        self._result = []
        self.rowcount = 0

        if stmt.startswith("select") and "from categories where id = %s" in stmt:
            self._select_by_id(self.db.categories, params[0])
        elif stmt.startswith("select") and "from categories order by name" in stmt:
            self._result = sorted(self.db.categories, key=lambda r: r["name"])
        elif stmt.startswith("select") and "from organizations where id = %s" in stmt:
            self._select_by_id(self.db.organizations, params[0])
        elif stmt.startswith("select") and "from needs where id = %s" in stmt:
            self._select_by_id(self.db.needs, params[0])
        elif stmt.startswith("select") and "from needs where organization_id = %s" in stmt:
            self._select_organization_needs(stmt, params[0])
        elif stmt.startswith("select") and "from needs_images where need_id = %s" in stmt:
            rows = [r for r in self.db.needs_images if r["need_id"] == params[0]]
            self._result = [dict(r) for r in sorted(rows, key=lambda r: r["id"])]
        elif stmt.startswith("insert into needs_images"):
            self._insert_image(params)
        elif stmt.startswith("insert into needs"):
            self._insert_need(params)
        elif stmt.startswith("update needs set"):
            self._update_need(params)
        elif stmt.startswith("delete from needs_images where id = %s and need_id = %s"):
            before = len(self.db.needs_images)
            self.db.needs_images = [
                r for r in self.db.needs_images
                if not (r["id"] == params[0] and r["need_id"] == params[1])
            ]
            self.rowcount = before - len(self.db.needs_images)
        else:
            raise AssertionError(f"unexpected statement: {stmt}")

    def _select_by_id(self, table, row_id):
        row = next((r for r in table if r["id"] == row_id), None)
        self._result = [dict(row)] if row else []
        self.rowcount = len(self._result)

    def _select_organization_needs(self, stmt, organization_id):
        rows = [dict(r) for r in self.db.needs if r["organization_id"] == organization_id]
        match = re.search(r"order by (\w+) (asc|desc)$", stmt)
        if match:
            col, direction = match.groups()
            rows.sort(key=lambda r: (r[col] is None, r[col]), reverse=direction == "desc")
        self._result = rows
        self.rowcount = len(rows)

    def _insert_need(self, params):
        (category_id, organization_id, title, description, required_qtd,
         reached_qtd, due_date, status, unit) = params
        row = {col: None for col in NEED_COLUMNS}
        row.update(
            id=self.db.next_id("needs"), category_id=category_id,
            organization_id=organization_id, title=title, description=description,
            required_qtd=required_qtd, reached_qtd=reached_qtd, due_date=due_date,
            status=status, unit=unit, created_at=self.db.now(),
        )
        self.db.needs.append(row)
        self._result = [{k: row[k] for k in ("id", "created_at", "updated_at")}]
        self.rowcount = 1

    def _update_need(self, params):
        (category_id, title, description, required_qtd, reached_qtd,
         due_date, unit, status, need_id) = params
        row = self.db.find("needs", need_id)
        if row is None:
            return
        row.update(
            category_id=category_id, title=title, description=description,
            required_qtd=required_qtd, reached_qtd=reached_qtd, due_date=due_date,
            unit=unit, status=status, updated_at=self.db.now(),
        )
        self._result = [{"updated_at": row["updated_at"]}]
        self.rowcount = 1

    def _insert_image(self, params):
        need_id, name, url = params
        row = {"id": self.db.next_id("needs_images"), "need_id": need_id, "name": name, "url": url}
        self.db.needs_images.append(row)
        self._result = [{"id": row["id"]}]
        self.rowcount = 1


class FakeConnection:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        return FakeCursor(self.db)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakePool:
    """Mimics psycopg2.pool.SimpleConnectionPool.getconn/putconn."""

    def __init__(self, db: FakeDatabase):
        self.conn = FakeConnection(db)
        self.checked_out = 0

    def getconn(self):
        self.checked_out += 1
        return self.conn

    def putconn(self, conn):
        assert conn is self.conn
        self.checked_out -= 1


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def fake_pool(fake_db) -> FakePool:
    pool = FakePool(fake_db)
    yield pool
    assert pool.checked_out == 0, "a connection was not returned to the pool"


@pytest.fixture()
def seeded(fake_db):
    """One category and two organizations to hang needs on."""
    return {
        "category_id": fake_db.add_category("Alimentos", "alimentos"),
        "other_category_id": fake_db.add_category("Roupas", "roupas"),
        "organization_id": fake_db.add_organization("Casa do Pão", "casa-do-pao", phone="5547999990000"),
        "other_organization_id": fake_db.add_organization("Abrigo Sol", "abrigo-sol"),
    }


@pytest.fixture()
def need_repo(fake_pool) -> NeedRepository:
    return NeedRepository(fake_pool)
