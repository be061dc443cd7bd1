"""
repositories/need_repo.py
-------------------------
Data access layer for needs and their images.
All SQL queries related to the `needs` and `needs_images` tables live here.
Categories and organizations are resolved through their own repositories.
"""

from dataclasses import replace

import psycopg2
from psycopg2 import extras

from db.connection import get_pool
from models.need import Need, NeedImage, NeedStatus
from repositories.category_repo import CategoryRepository
from repositories.exceptions import InfrastructureError, NotFoundError, ValidationError
from repositories.organization_repo import OrganizationRepository
from utils.logger import get_logger

logger = get_logger(__name__)

NEED_COLUMNS = (
    "id", "category_id", "organization_id", "title", "description",
    "required_qtd", "reached_qtd", "due_date", "status", "unit",
    "created_at", "updated_at",
)
NEED_IMAGE_COLUMNS = ("id", "need_id", "name", "url")

# Columns a listing may be ordered by; anything else falls back to DEFAULT_ORDER_COLUMN.
ORDERABLE_COLUMNS = frozenset({"id", "updated_at"})
DEFAULT_ORDER_COLUMN = "created_at"
ORDER_DIRECTIONS = ("asc", "desc")


class NeedRepository:
    """Repository for CRUD operations on the needs and needs_images tables."""

    def __init__(self, pool=None):
        self._pool = pool if pool is not None else get_pool()
        self.category_repo = CategoryRepository(self._pool)
        self.organization_repo = OrganizationRepository(self._pool)

    # ── READ ──────────────────────────────────────────────

    def get(self, need_id: int) -> Need:
        """
        Fetch a need with its images, category and organization summary.

        Args:
            need_id: Primary key.

        Returns:
            The fully populated Need.

        Raises:
            NotFoundError: If the need (or a row it references) does not exist.
            InfrastructureError: On any database failure.
        """
        sql = f"SELECT {', '.join(NEED_COLUMNS)} FROM needs WHERE id = %s;"
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (need_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

        if row is None:
            raise NotFoundError("need", need_id)

        need = self._row_to_need(row)
        need.images = self.get_need_images(need)
        need.category = self.category_repo.get(need.category_id)
        need.organization = self.organization_repo.get_base_organization(need.organization_id)
        return need

    def get_need_images(self, need: Need) -> list[NeedImage]:
        """Get the images of a need, in insertion order."""
        sql = f"SELECT {', '.join(NEED_IMAGE_COLUMNS)} FROM needs_images WHERE need_id = %s ORDER BY id;"
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (need.id,))
                return [self._row_to_image(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

    def get_organization_needs(
        self, organization_id: int, order_by: str = "", order: str = ""
    ) -> list[Need]:
        """
        Fetch every need of an organization, each with its category and images.

        Args:
            organization_id: Owning organization.
            order_by: 'id' or 'updated_at'; any other non-empty value orders
                by creation time. Empty keeps the database's natural order.
            order: 'asc' (default) or 'desc'. Only used with `order_by`.

        Returns:
            List of Need objects.

        Raises:
            ValidationError: If `order` is neither 'asc' nor 'desc'.
        """
        sql = f"SELECT {', '.join(NEED_COLUMNS)} FROM needs WHERE organization_id = %s"
        if order_by:
            if order_by not in ORDERABLE_COLUMNS:
                order_by = DEFAULT_ORDER_COLUMN
            if not order:
                order = "asc"
            elif order not in ORDER_DIRECTIONS:
                raise ValidationError("order", "Método de ordenação não reconhecido")
            # Both parts come from fixed allowlists, never from caller text.
            sql += f" ORDER BY {order_by} {order}"
        sql += ";"

        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (organization_id,))
                needs = [self._row_to_need(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

        for need in needs:
            need.category = self.category_repo.get(need.category_id)
            need.images = self.get_need_images(need)
        return needs

    # ── CREATE ────────────────────────────────────────────

    def create(self, need: Need) -> Need:
        """
        Insert a new need. It always starts as ACTIVE.

        Args:
            need: The Need to persist; its status is ignored.

        Returns:
            A copy of the Need with `id`, `status` and timestamps populated.
            The caller's object is left untouched.

        Raises:
            ValidationError: If the title is blank.
            NotFoundError: If the category or organization does not exist.
            InfrastructureError: On any database failure.
        """
        need = self._validate(need)
        need.status = NeedStatus.ACTIVE

        sql = """
            INSERT INTO needs
                (category_id, organization_id, title, description, required_qtd, reached_qtd, due_date, status, unit)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (
                    need.category_id, need.organization_id, need.title,
                    need.description, need.required_quantity, need.reached_quantity,
                    need.due_date, need.status.value, need.unit,
                ))
                row = cur.fetchone()
                need.id = row["id"]
                need.created_at = row["created_at"]
                need.updated_at = row["updated_at"]
            conn.commit()
            logger.info(f"Created need #{need.id} for organization {need.organization_id}")
            return need
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to create need: {e}")
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

    def create_image(self, image: NeedImage) -> NeedImage:
        """Attach an image to a need and return it with its `id` populated."""
        sql = """
            INSERT INTO needs_images (need_id, name, url)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (image.need_id, image.name, image.url))
                image.id = cur.fetchone()["id"]
            conn.commit()
            logger.info(f"Added image #{image.id} to need #{image.need_id}")
            return image
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add image to need #{image.need_id}: {e}")
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, need: Need) -> Need:
        """
        Update an existing need. The caller's status is stored as given;
        the owning organization cannot be changed.

        Args:
            need: Need with updated fields (must have id set).

        Returns:
            A validated copy of the Need with `updated_at` refreshed.

        Raises:
            ValidationError: If the title is blank or the status unknown.
            NotFoundError: If the category, the organization or the need itself
                does not exist.
            InfrastructureError: On any database failure.
        """
        need = self._validate(need)
        try:
            need.status = NeedStatus(need.status)
        except ValueError:
            raise ValidationError(
                "status", f"Situação de Necessidade não reconhecida: {need.status}",
            ) from None

        sql = """
            UPDATE needs
            SET category_id = %s, title = %s, description = %s, required_qtd = %s,
                reached_qtd = %s, due_date = %s, unit = %s, status = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING updated_at;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (
                    need.category_id, need.title, need.description,
                    need.required_quantity, need.reached_quantity, need.due_date,
                    need.unit, need.status.value, need.id,
                ))
                row = cur.fetchone()
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update need #{need.id}: {e}")
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

        if row is None:
            raise NotFoundError("need", need.id, f"Não foi encontrada Necessidade com ID: {need.id}")
        need.updated_at = row["updated_at"]
        logger.info(f"Updated need #{need.id}")
        return need

    # ── DELETE ────────────────────────────────────────────

    def delete_image(self, image_id: int, need_id: int) -> bool:
        """
        Remove an image from a need. Deleting an image that is already gone,
        or that belongs to another need, is a no-op.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM needs_images WHERE id = %s AND need_id = %s;"
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (image_id, need_id))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted image #{image_id} of need #{need_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete image #{image_id} of need #{need_id}: {e}")
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

    # ── HELPERS ───────────────────────────────────────────

    def _validate(self, need: Need) -> Need:
        """
        Return a copy with the title trimmed, after checking that the category
        and organization exist. A missing row surfaces as the lookup's
        NotFoundError; other lookup failures propagate unchanged.
        """
        need = replace(need, title=(need.title or "").strip())
        if not need.title:
            raise ValidationError("title", "Deve ser informado um título para a Necessidade")

        self.category_repo.get(need.category_id)
        self.organization_repo.get_base_organization(need.organization_id)

        return need

    @staticmethod
    def _row_to_need(row: dict) -> Need:
        """Convert a database row to a Need domain object."""
        return Need(
            id=row["id"],
            category_id=row["category_id"],
            organization_id=row["organization_id"],
            title=row["title"],
            description=row["description"],
            required_quantity=row["required_qtd"],
            reached_quantity=row["reached_qtd"],
            due_date=row["due_date"],
            status=NeedStatus(row["status"]),
            unit=row["unit"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _row_to_image(row: dict) -> NeedImage:
        """Convert a database row to a NeedImage domain object."""
        return NeedImage(id=row["id"], need_id=row["need_id"], name=row["name"], url=row["url"])
