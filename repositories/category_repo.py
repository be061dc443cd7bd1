"""
repositories/category_repo.py
-----------------------------
Read access to the `categories` table.
"""

import psycopg2
from psycopg2 import extras

from db.connection import get_pool
from models.category import Category
from repositories.exceptions import InfrastructureError, NotFoundError


class CategoryRepository:
    """Repository for lookups on the categories table."""

    def __init__(self, pool=None):
        self._pool = pool if pool is not None else get_pool()

    def get(self, category_id: int) -> Category:
        """
        Fetch a category by ID.

        Raises:
            NotFoundError: If no category has this ID.
            InfrastructureError: On any database failure.
        """
        sql = "SELECT id, name, slug FROM categories WHERE id = %s;"
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (category_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

        if row is None:
            raise NotFoundError("category", category_id, f"Não foi encontrada categoria com ID: {category_id}")
        return Category(id=row["id"], name=row["name"], slug=row["slug"])

    def get_all(self) -> list[Category]:
        """Get every category, ordered by name."""
        sql = "SELECT id, name, slug FROM categories ORDER BY name;"
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                return [
                    Category(id=r["id"], name=r["name"], slug=r["slug"])
                    for r in cur.fetchall()
                ]
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)
