"""
repositories/organization_repo.py
---------------------------------
Read access to the `organizations` table.
Only the public summary of an organization is exposed here.
"""

import psycopg2
from psycopg2 import extras

from db.connection import get_pool
from models.organization import BaseOrganization
from repositories.exceptions import InfrastructureError, NotFoundError

BASE_ORGANIZATION_COLUMNS = ("id", "name", "logo", "slug", "phone", "about", "video", "email")


class OrganizationRepository:
    """Repository for lookups on the organizations table."""

    def __init__(self, pool=None):
        self._pool = pool if pool is not None else get_pool()

    def get_base_organization(self, organization_id: int) -> BaseOrganization:
        """
        Fetch the summary view of an organization.

        Args:
            organization_id: Primary key.

        Returns:
            A BaseOrganization.

        Raises:
            NotFoundError: If no organization has this ID.
            InfrastructureError: On any database failure.
        """
        sql = f"SELECT {', '.join(BASE_ORGANIZATION_COLUMNS)} FROM organizations WHERE id = %s;"
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (organization_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise InfrastructureError(e) from e
        finally:
            self._pool.putconn(conn)

        if row is None:
            raise NotFoundError(
                "organization", organization_id,
                f"Não foi encontrada Organização com ID: {organization_id}",
            )
        return BaseOrganization(**{col: row[col] for col in BASE_ORGANIZATION_COLUMNS})
